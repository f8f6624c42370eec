from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from api.topology_api.errors import TopologyError
from .engine import RefreshResult, TopologyEngine

logger = logging.getLogger(__name__)


def spawn_task(coro, name: str) -> asyncio.Task:
    """Start `coro` as a task whose crash is logged instead of lost."""
    task = asyncio.create_task(coro, name=name)

    def _done_callback(t: asyncio.Task):
        try:
            t.result()
        except asyncio.CancelledError:
            logger.info("Task cancelled: %s", name)
        except Exception:
            logger.exception("Task crashed: %s", name)

    task.add_done_callback(_done_callback)
    return task


class TopologyPoller:
    """
    Periodically refreshes the engine's workspace from a datasource.

    Each refresh runs the blocking fetch in a worker thread and takes its own
    sequence number, so overlapping refreshes are allowed: the workspace keeps
    whichever result belongs to the newest request. A failing refresh never
    ends the loop; `on_commit` is called with every result that was kept.
    """

    def __init__(
        self,
        engine: TopologyEngine,
        datasource_name: str = "control-node",
        source: Any = None,
        poll_interval: Optional[float] = None,
        on_commit: Optional[Callable[[RefreshResult], None]] = None,
        **options: Any,
    ):
        self.engine = engine
        self.datasource_name = datasource_name
        self.source = source
        self.poll_interval = poll_interval or engine.config.poll_interval
        self.on_commit = on_commit
        self.options: Dict[str, Any] = options
        self._stop = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    async def refresh_once(self) -> Optional[RefreshResult]:
        try:
            return await asyncio.to_thread(
                self.engine.refresh, self.datasource_name, self.source, **self.options
            )
        except TopologyError as exc:
            # The engine already kept the last good graph and recorded the error
            logger.warning("Topology refresh failed, keeping last good graph: %s", exc)
            return None

    async def run(self) -> None:
        logger.info(
            "Polling '%s' every %.1fs", self.datasource_name, self.poll_interval
        )
        while not self._stop.is_set():
            try:
                result = await self.refresh_once()
                if result is not None and result.committed and self.on_commit is not None:
                    self.on_commit(result)
            except Exception:
                logger.exception("Topology refresh crashed, polling continues")
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.poll_interval)
            except asyncio.TimeoutError:
                pass

    def start(self) -> asyncio.Task:
        self._stop.clear()
        self._task = spawn_task(self.run(), name="topology-poller")
        return self._task

    def request_stop(self) -> None:
        """Ask the loop to finish after the refresh in flight; safe from signal handlers."""
        self._stop.set()

    async def stop(self) -> None:
        self.request_stop()
        if self._task is not None:
            await self._task
            self._task = None
