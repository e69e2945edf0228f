"""
HTTP server lifecycle
Binds the listener with fixed timeouts and runs the application under uvicorn
"""
import asyncio
import logging
import sys
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from pydantic import ValidationError
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.config import Settings, get_settings
from app.main import create_app, setup_logging
from app.models.responses import utc_timestamp

logger = logging.getLogger(__name__)

# Listener timeouts in seconds; fixed for every deployment
READ_TIMEOUT = 15
WRITE_TIMEOUT = 15
IDLE_TIMEOUT = 60


class ServerError(RuntimeError):
    """The listener failed to bind or stopped with an error"""


class ConnectionTimeouts:
    """
    ASGI wrapper bounding how long a connection may stall

    A request body that stops arriving for READ_TIMEOUT seconds is treated
    as a client disconnect. A response write that cannot be flushed within
    WRITE_TIMEOUT seconds is abandoned; uvicorn then closes the connection
    because the response never completed.
    """

    def __init__(self, app: ASGIApp, read_timeout: float = READ_TIMEOUT, write_timeout: float = WRITE_TIMEOUT):
        self.app = app
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        body_complete = False
        read_timed_out = False
        write_stalled = False

        async def timed_receive() -> Message:
            nonlocal body_complete, read_timed_out
            if read_timed_out:
                return {"type": "http.disconnect"}
            if body_complete:
                return await receive()
            try:
                message = await asyncio.wait_for(receive(), self.read_timeout)
            except asyncio.TimeoutError:
                read_timed_out = True
                logger.warning(f"Read timeout on {scope.get('path')} after {self.read_timeout}s")
                return {"type": "http.disconnect"}
            if message["type"] == "http.request" and not message.get("more_body", False):
                body_complete = True
            return message

        async def timed_send(message: Message) -> None:
            nonlocal write_stalled
            if write_stalled:
                return
            try:
                await asyncio.wait_for(send(message), self.write_timeout)
            except asyncio.TimeoutError:
                write_stalled = True
                logger.warning(f"Write timeout on {scope.get('path')} after {self.write_timeout}s")

        await self.app(scope, timed_receive, timed_send)


class Server:
    """Owns the application and the single listener serving it"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.app: FastAPI = create_app(self.settings)

    def build_config(self, host: str, port: int) -> uvicorn.Config:
        return uvicorn.Config(
            ConnectionTimeouts(self.app),
            host=host,
            port=port,
            timeout_keep_alive=IDLE_TIMEOUT,
            log_config=None,  # Keep the logging configured by setup_logging
            access_log=False,  # RequestLoggingMiddleware covers access logs
        )

    def start(self, host: str, port: int) -> None:
        """
        Serve until the listener is closed

        Raises:
            ServerError: if the listener cannot bind or fails while serving
        """
        server = uvicorn.Server(self.build_config(host, port))
        logger.info(f"Starting HTTP server on {host}:{port}")
        try:
            server.run()
        except (OSError, SystemExit) as e:
            # uvicorn logs bind failures and exits with status 1
            logger.error(f"HTTP server error: {e!r}")
            raise ServerError(f"HTTP server on {host}:{port} failed") from e


def main() -> int:
    """Process entry point"""
    load_dotenv()

    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(settings)
    server = Server(settings)

    logger.info(f"Server starting at http://{settings.HOST}:{settings.PORT}/")
    logger.info(f"Environment: {settings.APP_ENV}")
    logger.info(f"Version: {settings.APP_VERSION}")
    logger.info(f"Started at: {utc_timestamp()}")

    try:
        server.start(settings.HOST, settings.PORT)
    except ServerError as e:
        logger.error(f"Server failed to start: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
