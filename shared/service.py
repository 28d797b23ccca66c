"""Base service class that handles boilerplate setup.

Every service can inherit from this to get config, logging, signal
handling and a shutdown event set up automatically.

Usage:
    import asyncio
    from shared.service import BaseService

    class MyService(BaseService):
        name = "my-service"

        async def run(self) -> None:
            # self.settings and self.logger are ready to use
            while not self.shutting_down:
                self.logger.info("working")
                await asyncio.sleep(60)

    if __name__ == "__main__":
        service = MyService()
        asyncio.run(service.start())
"""

from __future__ import annotations

import asyncio
import signal
import time

from shared.config import Settings
from shared.log import get_logger


class BaseService:
    """Base class for long-running exporter services."""

    name: str = "unnamed-service"

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.logger = get_logger(self.name)
        self._shutdown_event = asyncio.Event()
        self._start_time: float = time.monotonic()

    async def run(self) -> None:
        """Override this method with your service logic."""
        raise NotImplementedError("Subclasses must implement run()")

    async def start(self) -> None:
        """Start the service with graceful shutdown handling."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self._handle_shutdown)

        self.logger.info("service_starting", service=self.name)

        try:
            await self.run()
        except asyncio.CancelledError:
            self.logger.info("service_cancelled")
        finally:
            await self.shutdown()

    def _handle_shutdown(self) -> None:
        self.logger.info("shutdown_signal_received")
        self._shutdown_event.set()

    async def close(self) -> None:
        """Override to release clients opened by the service."""

    async def shutdown(self) -> None:
        """Clean up resources."""
        self.logger.info("service_shutting_down")
        self._shutdown_event.set()
        await self.close()
        self.logger.info("service_stopped", uptime_seconds=self.uptime_seconds)

    @property
    def shutting_down(self) -> bool:
        return self._shutdown_event.is_set()

    @property
    def uptime_seconds(self) -> float:
        return round(time.monotonic() - self._start_time, 1)
