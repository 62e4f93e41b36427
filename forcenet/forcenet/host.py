"""Host adapters: readiness bridge and a file-backed host."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Protocol

from .errors import ForcenetError, HostAlreadyAttached
from .models import FieldMap
from .style import load_style
from .table import Payload, load_payload
from .watcher import run_watch_loop, watch_files

logger = logging.getLogger(__name__)

DrawCallback = Callable[[Payload], None]


class Host(Protocol):
    """Anything that pushes payloads to a draw callback."""

    def subscribe_to_data(self, callback: DrawCallback) -> None: ...


class HostBridge:
    """Defers subscription until the host becomes available, exactly once.

    The host adapter calls `attach()`; the core awaits `wait_ready()` (or
    `subscribe()`), which resolves as soon as the host is attached.
    """

    def __init__(self) -> None:
        self._host: Host | None = None
        self._ready: asyncio.Future | None = None

    @property
    def attached(self) -> bool:
        return self._host is not None

    def attach(self, host: Host) -> None:
        if self._host is not None:
            raise HostAlreadyAttached("Host is already attached")
        self._host = host
        if self._ready is not None and not self._ready.done():
            self._ready.set_result(host)
        logger.debug("Host attached: %s", type(host).__name__)

    async def wait_ready(self) -> Host:
        if self._host is not None:
            return self._host
        if self._ready is None:
            self._ready = asyncio.get_running_loop().create_future()
        return await self._ready

    async def subscribe(self, draw: DrawCallback) -> Host:
        host = await self.wait_ready()
        host.subscribe_to_data(draw)
        return host


class FileHost:
    """Serves payloads from a data file (CSV or JSON) and an optional style file."""

    def __init__(
        self,
        data_path: Path,
        *,
        field_map: FieldMap | None = None,
        style_path: Path | None = None,
    ):
        self.data_path = data_path
        self.field_map = field_map
        self.style_path = style_path
        self._callbacks: list[DrawCallback] = []

    @property
    def paths(self) -> list[Path]:
        return [p for p in (self.data_path, self.style_path) if p is not None]

    def load(self) -> Payload:
        style = load_style(self.style_path) if self.style_path else None
        return load_payload(self.data_path, field_map=self.field_map, style=style)

    def subscribe_to_data(self, callback: DrawCallback) -> None:
        self._callbacks.append(callback)
        callback(self.load())

    def refresh(self, changed: Path | None = None) -> bool:
        """Reload and push to subscribers. Returns False if the files could not be read."""
        try:
            payload = self.load()
        except ForcenetError as e:
            logger.error("Refresh skipped (%s): %s", changed or self.data_path, e)
            return False
        for callback in list(self._callbacks):
            callback(payload)
        return True

    def watch(self):
        """Start watching the files; returns (observer, handler)."""
        return watch_files(self.paths, self.refresh)

    def run_forever(self) -> None:
        run_watch_loop(self.paths, self.refresh)
