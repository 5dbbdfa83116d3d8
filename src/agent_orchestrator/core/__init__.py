"""Core engine components.

- RateLimiter: per-provider fixed-window admission
- APIGateway: provider selection, rate limiting, and error accounting
- MemoryManager: bounded FIFO agent memory
"""

from .gateway import APIGateway, GatewayMetrics
from .memory_manager import DEFAULT_MEMORY_CAP, MemoryManager
from .rate_limiter import RateLimiter, RateLimitWindow

__all__ = [
    "APIGateway",
    "DEFAULT_MEMORY_CAP",
    "GatewayMetrics",
    "MemoryManager",
    "RateLimiter",
    "RateLimitWindow",
]
