"""
Keepalive HTTP endpoint.

Answers host uptime pings (Replit/Glitch style hosts put idle processes to
sleep) with a plain-text banner and a small JSON health document.
"""

from collections.abc import Callable

import structlog
from aiohttp import web

from ..utils.log_events import LogEvents

log = structlog.get_logger()

BANNER = "Scoreboard bot ON"


def create_app(is_ready: Callable[[], bool] | None = None) -> web.Application:
    """
    Build the keepalive application.

    Args:
        is_ready: Reports whether the Discord client is connected

    Returns:
        aiohttp application serving ``/`` and ``/health``
    """

    async def index(_request: web.Request) -> web.Response:
        return web.Response(text=BANNER, content_type="text/plain")

    async def health(_request: web.Request) -> web.Response:
        ready = bool(is_ready()) if is_ready else False
        return web.json_response({"status": "ok", "ready": ready})

    app = web.Application()
    app.router.add_get("/", index)
    app.router.add_get("/health", health)
    return app


class KeepaliveServer:
    """Runs the keepalive application next to the bot on the same loop."""

    def __init__(
        self,
        host: str = "0.0.0.0",
        port: int = 3000,
        is_ready: Callable[[], bool] | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.app = create_app(is_ready)
        self._runner: web.AppRunner | None = None

    @property
    def running(self) -> bool:
        return self._runner is not None

    async def start(self) -> None:
        """Bind and start serving. Calling it twice is a no-op."""
        if self._runner is not None:
            return
        runner = web.AppRunner(self.app)
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        await site.start()
        self._runner = runner
        log.info(LogEvents.KEEPALIVE_STARTED, url=f"http://{self.host}:{self.port}")

    async def stop(self) -> None:
        """Stop serving and release the socket."""
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        log.info(LogEvents.KEEPALIVE_STOPPED)


__all__ = ["BANNER", "KeepaliveServer", "create_app"]
