"""FastAPI server for the orchestrator."""

from fastapi import Depends, FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..exceptions import (
    AgentNotFoundError,
    ConfigurationError,
    OrchestratorError,
    ProviderError,
    RateLimitError,
    UnsupportedProviderError,
)
from ..orchestrator import VERSION, Orchestrator
from .middleware import RequestCounter, RequestLoggingMiddleware
from .schemas import CollaborateRequest, CreateAgentRequest, ExecuteRequest
from .sessions import SessionManager
from .websocket import handle_websocket

# status codes for engine errors surfaced over http
_ERROR_STATUS: list[tuple[type[Exception], int]] = [
    (AgentNotFoundError, 404),
    (RateLimitError, 429),
    (UnsupportedProviderError, 400),
    (ConfigurationError, 503),
    (ProviderError, 502),
    (ValueError, 400),
]


def create_app(
    orchestrator: Orchestrator | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        orchestrator: Engine to serve. Built from settings if not given.
        settings: Settings to use. Loaded from the environment if not given.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Dual-Provider Agent Orchestrator API",
        description="Multi-agent orchestration over OpenAI and Anthropic",
        version=VERSION,
    )
    app.state.orchestrator = orchestrator or Orchestrator.from_settings(settings)
    app.state.sessions = SessionManager(session_timeout=settings.session_timeout)
    app.state.http_requests = RequestCounter()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware, counter=app.state.http_requests)

    app.add_exception_handler(OrchestratorError, _engine_error_handler)
    app.add_exception_handler(ValueError, _engine_error_handler)
    _register_routes(app)
    return app


def _engine_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map engine exceptions onto HTTP error responses."""
    status = 500
    for exc_type, code in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            status = code
            break

    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after is not None:
        headers = {"Retry-After": str(int(exc.retry_after) + 1)}
    return JSONResponse(status_code=status, content={"error": str(exc)}, headers=headers)


def get_orchestrator(request: Request) -> Orchestrator:
    """Dependency returning the app's engine."""
    return request.app.state.orchestrator


def _register_routes(app: FastAPI) -> None:
    @app.get("/health")
    def health(orchestrator: Orchestrator = Depends(get_orchestrator)) -> dict:
        """Liveness and provider configuration."""
        return orchestrator.health()

    @app.get("/api/stats")
    def stats(
        request: Request,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> dict:
        """Request counters, rate-limit windows, and session counts."""
        sessions: SessionManager = request.app.state.sessions
        return {
            "requests": request.app.state.http_requests.count,
            **orchestrator.stats(),
            "activeSessions": sessions.active_count,
            "totalSessions": sessions.total_count,
        }

    @app.post("/api/agents")
    def create_agent(
        request: CreateAgentRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> dict:
        """Create an agent."""
        agent = orchestrator.create_agent(request.model_dump(exclude_none=True))
        return {"success": True, "agent": agent.to_dict()}

    @app.get("/api/agents")
    def list_agents(orchestrator: Orchestrator = Depends(get_orchestrator)) -> dict:
        """List all agents."""
        return {
            "success": True,
            "agents": [agent.to_dict() for agent in orchestrator.list_agents()],
        }

    @app.post("/api/agents/{agent_id}/execute")
    def execute_agent(
        agent_id: str,
        request: ExecuteRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> dict:
        """Run one exchange with an agent."""
        result = orchestrator.execute_agent(agent_id, request.message, request.options)
        return {"success": True, "result": result.to_dict()}

    @app.post("/api/collaborate")
    def collaborate(
        request: CollaborateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> dict:
        """Run a collaboration to completion."""
        run = orchestrator.collaborate(request.agent_ids, request.goal, request.iterations)
        return {"success": True, "collaboration": run.to_dict()}

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        """Streaming channel."""
        await handle_websocket(
            websocket,
            websocket.app.state.orchestrator,
            websocket.app.state.sessions,
        )
