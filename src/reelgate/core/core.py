from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import cast

from reelgate.config import Config
from reelgate.utils import Clock, now


class Service:
    """Base class for services sharing the core clock."""

    def __init__(self, clock: Clock) -> None:
        self.clock = clock
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from reelgate.core.modules.access.service import AccessService  # noqa: PLC0415
    from reelgate.core.modules.media.service import MediaTokenService  # noqa: PLC0415
    from reelgate.core.modules.reaper.service import ReaperService  # noqa: PLC0415
    from reelgate.core.modules.session.service import SessionService  # noqa: PLC0415
    from reelgate.core.modules.video.service import VideoService  # noqa: PLC0415

    session: SessionService
    media: MediaTokenService
    reaper: ReaperService
    access: AccessService
    video: VideoService

    def __init__(self, clock: Clock) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        # Token stores come first, the reaper and access services depend on them
        service_configs = [
            ("session", "reelgate.core.modules.session.service", "SessionService"),
            ("media", "reelgate.core.modules.media.service", "MediaTokenService"),
            ("reaper", "reelgate.core.modules.reaper.service", "ReaperService"),
            ("access", "reelgate.core.modules.access.service", "AccessService"),
            ("video", "reelgate.core.modules.video.service", "VideoService"),
        ]

        # Dynamically import and instantiate services
        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(clock)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, clock, and all service instances."""

    config: Config
    clock: Clock
    services: Services

    def __init__(self, config: Config, clock: Clock = now) -> None:
        """Initialize core with config and auto-register services."""
        self.config = config
        self.clock = clock
        self.services = Services(clock)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop all services on shutdown."""
        await self.services.stop_all()
