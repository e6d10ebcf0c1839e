"""Background cache refresh for asyncio UIs.

A rebuild can take longer than a keystroke, so the walk runs in a worker
thread while the event loop keeps serving queries from the current
snapshot. Finished snapshots are published with a single swap.
"""

import asyncio

from mention_search.search.system import SearchSystem
from mention_search.utils.logging import get_logger

logger = get_logger(__name__)


class BackgroundRefresher:
    """Runs cache rebuilds off the event loop, newest request wins.

    Only one walk runs at a time. A request that is superseded before its
    walk starts never walks; one superseded while walking has its snapshot
    discarded.
    """

    def __init__(self, system: SearchSystem) -> None:
        self._system = system
        self._generation = 0
        self._lock: asyncio.Lock | None = None
        self._tasks: set[asyncio.Task[bool]] = set()
        self._latest: asyncio.Task[bool] | None = None
        self.published = 0
        self.discarded = 0

    def request_refresh(self) -> "asyncio.Task[bool]":
        """Schedule a rebuild, superseding any request still pending.

        Must be called from a running event loop.

        Returns:
            Task resolving to True if its snapshot was published.
        """
        self._generation += 1
        task = asyncio.create_task(self._run(self._generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._latest = task
        return task

    async def wait(self) -> bool:
        """Wait for the most recent request to finish."""
        if self._latest is None:
            return False
        return await self._latest

    def cancel(self) -> None:
        """Cancel all outstanding requests."""
        for task in list(self._tasks):
            task.cancel()
        self._latest = None

    async def _run(self, generation: int) -> bool:
        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            if generation != self._generation:
                self.discarded += 1
                return False

            snapshot = await asyncio.to_thread(self._system.build_snapshot)

            if generation != self._generation:
                logger.debug("Discarding superseded snapshot (generation %d)", generation)
                self.discarded += 1
                return False

            self._system.publish_snapshot(snapshot)
            self.published += 1
            return True
