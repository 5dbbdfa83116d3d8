"""HTTP and streaming surface for the orchestrator."""

from .channel import SessionChannel
from .server import create_app

__all__ = ["SessionChannel", "create_app"]
