# Tests for listing/aggregator.py
# Created: 2026-10-19

import asyncio
import errno
import os
from unittest.mock import AsyncMock, patch

import pytest

from showdir.listing.aggregator import aggregate
from showdir.listing.entries import SyntheticEntry, UnreadableEntry, VirtualAction

ACTION = VirtualAction(name="Play media with IINA", public_url="http://nas:8080")

DIR_MODE = 0o040755
FILE_MODE = 0o100644


def make_stat_result(mode: int, size: int = 0, mtime: float = 0.0, ino: int = 0):
    return os.stat_result((mode, ino, 0, 1, 0, 0, size, mtime, mtime, mtime))


def fake_stat(table: dict[str, int | OSError], delays: dict[str, float] | None = None):
    """Async stat over a name -> mode (or exception) table."""
    delays = delays or {}

    async def _stat(path: str):
        name = os.path.basename(path)
        await asyncio.sleep(delays.get(name, 0))
        value = table[name]
        if isinstance(value, OSError):
            raise value
        return make_stat_result(mode=value, size=len(name))

    return _stat


def names_of(entries):
    return [e.name for e in entries]


class TestAggregate:
    @pytest.mark.asyncio
    async def test_empty_names_complete_without_lookups(self):
        stat = AsyncMock()
        buckets = await aggregate("/srv", [], ACTION, stat=stat)
        assert buckets.directories == []
        assert buckets.files == []
        assert buckets.errors == []
        stat.assert_not_called()

    @pytest.mark.asyncio
    async def test_partitions_dirs_files_and_errors(self):
        missing = FileNotFoundError(errno.ENOENT, "No such file", "/srv/missing")
        stat = fake_stat({"a": FILE_MODE, "b": DIR_MODE, "missing": missing})

        buckets = await aggregate("/srv", ["a", "b", "missing"], ACTION, stat=stat)

        assert names_of(buckets.directories) == ["b"]
        assert names_of(buckets.files) == ["a"]
        assert names_of(buckets.errors) == ["missing"]
        assert buckets.errors[0].error is missing
        assert isinstance(buckets.errors[0], UnreadableEntry)

    @pytest.mark.asyncio
    async def test_synthetic_entry_never_stats(self):
        stat = AsyncMock()
        buckets = await aggregate("/srv", [ACTION.name], ACTION, stat=stat)

        stat.assert_not_called()
        assert len(buckets.directories) == 1
        entry = buckets.directories[0]
        assert isinstance(entry, SyntheticEntry)
        assert entry.is_directory()
        assert entry.stat.is_special
        assert entry.stat.mode == 0o777
        assert entry.stat.ino == 1

    @pytest.mark.asyncio
    async def test_synthetic_survives_all_other_failures(self):
        denied = PermissionError(errno.EACCES, "Permission denied")
        stat = fake_stat({"x": denied, "y": denied})

        buckets = await aggregate("/srv", ["x", ACTION.name, "y"], ACTION, stat=stat)

        assert names_of(buckets.directories) == [ACTION.name]
        assert names_of(buckets.errors) == ["x", "y"]

    @pytest.mark.asyncio
    async def test_stats_are_joined_with_full_paths(self):
        stat = AsyncMock(return_value=make_stat_result(mode=FILE_MODE))
        await aggregate("/srv/pub", ["one", "two"], ACTION, stat=stat)

        called = sorted(call.args[0] for call in stat.await_args_list)
        assert called == ["/srv/pub/one", "/srv/pub/two"]

    @pytest.mark.asyncio
    async def test_result_does_not_depend_on_completion_order(self):
        table = {"a": FILE_MODE, "b": DIR_MODE, "c": FILE_MODE, "d": DIR_MODE}
        names = ["a", "b", "c", "d"]

        fast_first = await aggregate(
            "/srv", names, ACTION, stat=fake_stat(table, {"a": 0.03, "b": 0.02, "c": 0.01})
        )
        slow_first = await aggregate(
            "/srv", names, ACTION, stat=fake_stat(table, {"d": 0.03, "c": 0.02, "b": 0.01})
        )

        assert names_of(fast_first.directories) == names_of(slow_first.directories) == ["b", "d"]
        assert names_of(fast_first.files) == names_of(slow_first.files) == ["a", "c"]

    @pytest.mark.asyncio
    async def test_lookups_run_concurrently(self):
        in_flight = 0
        peak = 0

        async def _stat(path):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return make_stat_result(mode=FILE_MODE)

        await aggregate("/srv", [f"f{i}" for i in range(20)], ACTION, stat=_stat)
        assert peak == 20

    @pytest.mark.asyncio
    async def test_uses_aiofiles_stat_by_default(self, tmp_path):
        (tmp_path / "file.txt").write_text("hi")
        (tmp_path / "dir").mkdir()
        (tmp_path / "dangling").symlink_to(tmp_path / "nowhere")

        buckets = await aggregate(
            str(tmp_path), ["file.txt", "dir", "dangling", ACTION.name], ACTION
        )

        assert sorted(names_of(buckets.directories)) == sorted(["dir", ACTION.name])
        assert names_of(buckets.files) == ["file.txt"]
        assert buckets.files[0].stat.size == 2
        assert names_of(buckets.errors) == ["dangling"]

    @pytest.mark.asyncio
    async def test_non_os_errors_propagate(self):
        stat = AsyncMock(side_effect=RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            await aggregate("/srv", ["a"], ACTION, stat=stat)

    @pytest.mark.asyncio
    async def test_default_stat_is_looked_up_at_call_time(self):
        stat = AsyncMock(return_value=make_stat_result(mode=DIR_MODE))
        with patch("aiofiles.os.stat", stat):
            buckets = await aggregate("/srv", ["d"], ACTION)
        assert names_of(buckets.directories) == ["d"]
        stat.assert_awaited_once_with("/srv/d")
