"""
Graceful shutdown handling for the scoreboard bot.

Implements signal handling and resource cleanup for a clean shutdown.
"""

import asyncio
import signal
import types
from collections.abc import Awaitable, Callable
from contextlib import suppress

import structlog

from ..utils.log_events import LogEvents

log = structlog.get_logger()


class GracefulShutdown:
    """
    Manages graceful shutdown of the application.

    Handles SIGINT and SIGTERM and runs the registered cleanup tasks
    (closing the Discord connection and stopping the keepalive server).
    """

    def __init__(self) -> None:
        """Initialize the graceful shutdown handler."""
        self._shutdown = False
        self._shutdown_event = asyncio.Event()
        self._cleanup_tasks: list[Callable[[], Awaitable[None]]] = []
        self._loop: asyncio.AbstractEventLoop | None = None

    def register_cleanup_task(self, task: Callable[[], Awaitable[None]]) -> None:
        """
        Register a cleanup task to run on shutdown.

        Args:
            task: Async function to run during cleanup
        """
        self._cleanup_tasks.append(task)
        log.debug(LogEvents.CLEANUP_TASK_REGISTERED, task_count=len(self._cleanup_tasks))

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """
        Setup signal handlers for graceful shutdown.

        Args:
            loop: Event loop (uses running loop if not provided)
        """
        self._loop = loop or asyncio.get_running_loop()

        for sig in (signal.SIGINT, signal.SIGTERM):
            signal.signal(sig, self._signal_handler)

        log.info(LogEvents.SIGNAL_HANDLERS_CONFIGURED)

    def _signal_handler(self, signum: int, frame: types.FrameType | None) -> None:
        sig_name = signal.Signals(signum).name
        log.info(LogEvents.SIGNAL_RECEIVED, signal=sig_name)

        if self._shutdown:
            log.warning(LogEvents.FORCED_EXIT_TRIGGERED)
            return

        self._shutdown = True

        if self._loop and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._shutdown_event.set)

    def request_shutdown(self) -> None:
        """Trigger shutdown from code rather than a signal."""
        self._shutdown = True
        self._shutdown_event.set()

    async def wait_for_shutdown(self) -> None:
        """Wait for the shutdown signal."""
        await self._shutdown_event.wait()
        log.info(LogEvents.SHUTDOWN_STARTED)

    @property
    def is_shutting_down(self) -> bool:
        """Check if shutdown has been initiated."""
        return self._shutdown

    async def cleanup(self) -> None:
        """
        Run all cleanup tasks in registration order.

        A failing task is logged and does not stop the remaining ones.
        """
        log.info(LogEvents.CLEANUP_STARTED, task_count=len(self._cleanup_tasks))

        for i, task in enumerate(self._cleanup_tasks, 1):
            task_name = getattr(task, "__name__", f"task_{i}")
            try:
                log.debug(LogEvents.CLEANUP_TASK_RUNNING, task=task_name, index=i)
                await task()
            except Exception as e:
                log.error(
                    LogEvents.CLEANUP_TASK_FAILED,
                    task=task_name,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

        log.info(LogEvents.CLEANUP_FINISHED)


async def run_with_lifecycle(
    start: Callable[[], Awaitable[None]],
    cleanup_tasks: list[Callable[[], Awaitable[None]]] | None = None,
    shutdown_manager: GracefulShutdown | None = None,
) -> None:
    """
    Run an application until it stops or a shutdown signal arrives.

    Args:
        start: Async function running the application
        cleanup_tasks: Async functions run on the way out, in order
        shutdown_manager: Optional pre-built manager (signal handlers are
            installed on it)
    """
    shutdown_manager = shutdown_manager or GracefulShutdown()
    for task in cleanup_tasks or []:
        shutdown_manager.register_cleanup_task(task)

    shutdown_manager.setup_signal_handlers()
    log.info(LogEvents.APP_STARTED)

    start_task = asyncio.create_task(start())
    wait_shutdown_task = asyncio.create_task(shutdown_manager.wait_for_shutdown())

    done, pending = await asyncio.wait(
        [start_task, wait_shutdown_task],
        return_when=asyncio.FIRST_COMPLETED,
    )

    for task in pending:
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    try:
        # If the application itself failed, propagate after cleanup
        if start_task in done:
            start_task.result()
    finally:
        await shutdown_manager.cleanup()
        log.info(LogEvents.APP_STOPPED)


__all__ = ["GracefulShutdown", "run_with_lifecycle"]
