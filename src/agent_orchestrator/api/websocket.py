"""WebSocket binding for the session channel."""

import asyncio

from fastapi import WebSocket
from starlette.concurrency import run_in_threadpool

from ..logging import get_logger
from ..orchestrator import Orchestrator
from .channel import SessionChannel
from .sessions import SessionManager

logger = get_logger(__name__)

IDLE_CLOSE_CODE = 1001


async def handle_websocket(
    websocket: WebSocket,
    orchestrator: Orchestrator,
    sessions: SessionManager,
) -> None:
    """Serve one streaming connection until the client leaves or idles out.

    Inbound frames are handled strictly one at a time: a long collaboration
    blocks further frames on this connection until its result is sent. The
    engine runs in the thread pool so other connections keep being served.
    """
    await websocket.accept()

    client = f"{websocket.client.host}:{websocket.client.port}" if websocket.client else None
    session = sessions.open_session(client=client)
    channel = SessionChannel(orchestrator, session.id)

    try:
        await websocket.send_json(channel.welcome())

        while True:
            try:
                message = await asyncio.wait_for(websocket.receive(), timeout=sessions.timeout)
            except asyncio.TimeoutError:
                logger.info(f"session {session.id} idle for {sessions.timeout}s, closing")
                await websocket.close(code=IDLE_CLOSE_CODE)
                break

            if message["type"] == "websocket.disconnect":
                break

            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""

            event = await run_in_threadpool(channel.handle_message, raw)
            await websocket.send_json(event)
    finally:
        sessions.close_session(session.id)
