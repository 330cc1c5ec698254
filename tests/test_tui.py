"""Tests for the interactive branch picker."""

import asyncio

from git_broom.models.branch import BranchInfo, BranchStatus
from git_broom.tui import SweepApp

BRANCHES = [
    BranchInfo("alpha", BranchStatus.MERGED),
    BranchInfo("beta", BranchStatus.ACTIVE),
    BranchInfo("gamma", BranchStatus.MERGED),
    BranchInfo("delta", BranchStatus.UNPUSHED),
]


def _run(app, *keys):
    """Press keys in a headless app and return what it exited with."""
    async def _drive():
        async with app.run_test() as pilot:
            for key in keys:
                await pilot.press(key)
    asyncio.run(_drive())
    return app.return_value


class TestSweepApp:
    """Test selection keys of the picker."""

    def test_merged_branches_preselected(self):
        assert _run(SweepApp(BRANCHES), "d") == ["alpha", "gamma"]

    def test_current_branch_not_preselected(self):
        assert _run(SweepApp(BRANCHES, current_branch="alpha"), "d") == ["gamma"]

    def test_clear_selection(self):
        assert _run(SweepApp(BRANCHES), "c", "d") == []

    def test_reselect_merged(self):
        assert _run(SweepApp(BRANCHES), "c", "a", "d") == ["alpha", "gamma"]

    def test_quit_returns_empty_selection(self):
        assert _run(SweepApp(BRANCHES), "q") == []

    def test_escape_returns_empty_selection(self):
        assert _run(SweepApp(BRANCHES), "escape") == []
