"""Unit tests for background cache refresh."""

import asyncio
import threading
from pathlib import Path

import pytest

from mention_search.search import BackgroundRefresher, CacheSnapshot, SearchSystem


def paths(system: SearchSystem, query: str) -> list[str]:
    return [result.entry.relative_path for result in system.search(query)]


class TestBackgroundRefresher:
    """Tests for BackgroundRefresher."""

    @pytest.mark.asyncio
    async def test_refresh_publishes(self, sample_project: Path) -> None:
        """Test a completed refresh becomes visible to searches."""
        system = SearchSystem(sample_project)
        system.search("x")
        (sample_project / "fresh.x").write_text("")

        refresher = BackgroundRefresher(system)
        published = await refresher.request_refresh()

        assert published is True
        assert refresher.published == 1
        assert paths(system, "fresh") == ["fresh.x"]

    @pytest.mark.asyncio
    async def test_latest_request_wins(self, sample_project: Path) -> None:
        """Test superseded requests are discarded."""
        system = SearchSystem(sample_project)
        refresher = BackgroundRefresher(system)

        first = refresher.request_refresh()
        second = refresher.request_refresh()
        third = refresher.request_refresh()

        results = await asyncio.gather(first, second, third)
        assert results == [False, False, True]
        assert refresher.published == 1
        assert refresher.discarded == 2
        assert await refresher.wait() is True

    @pytest.mark.asyncio
    async def test_superseded_walk_is_not_published(
        self, sample_project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a walk overtaken while running has its snapshot dropped."""
        system = SearchSystem(sample_project)
        walking = threading.Event()
        release = threading.Event()
        built: list[CacheSnapshot] = []
        published: list[CacheSnapshot] = []
        build = system.build_snapshot
        publish = system.publish_snapshot

        def slow_build() -> CacheSnapshot:
            if not built:
                walking.set()
                release.wait(5)
            snapshot = build()
            built.append(snapshot)
            return snapshot

        def record_publish(snapshot: CacheSnapshot) -> None:
            published.append(snapshot)
            publish(snapshot)

        monkeypatch.setattr(system, "build_snapshot", slow_build)
        monkeypatch.setattr(system, "publish_snapshot", record_publish)

        refresher = BackgroundRefresher(system)
        first = refresher.request_refresh()
        assert await asyncio.to_thread(walking.wait, 5)

        second = refresher.request_refresh()
        release.set()

        assert await first is False
        assert await second is True
        assert len(built) == 2
        assert len(published) == 1
        assert published[0] is built[1]
        assert refresher.discarded == 1
        assert refresher.published == 1

    @pytest.mark.asyncio
    async def test_wait_without_requests(self, sample_project: Path) -> None:
        """Test waiting when nothing was requested."""
        refresher = BackgroundRefresher(SearchSystem(sample_project))
        assert await refresher.wait() is False

    @pytest.mark.asyncio
    async def test_cancel(self, sample_project: Path) -> None:
        """Test cancelling pending requests."""
        refresher = BackgroundRefresher(SearchSystem(sample_project))
        task = refresher.request_refresh()
        refresher.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert await refresher.wait() is False
