"""Tests for the git-broom command line."""

import pytest

from git_broom.cli.args import parse_args
from git_broom.cli.main import main


@pytest.fixture
def sweep_repo(git_repo, origin, commit_file, monkeypatch):
    """Repository with one merged and one unmerged branch, as the working directory."""
    git_repo.git.checkout("-b", "done")
    commit_file(git_repo, "done.txt", "done\n")
    git_repo.git.checkout("main")
    git_repo.git.merge("done", "--no-ff", "-m", "Merge done")
    git_repo.git.push("origin", "main")

    git_repo.git.checkout("-b", "wip")
    commit_file(git_repo, "wip.txt", "wip\n")
    git_repo.git.checkout("main")

    monkeypatch.chdir(git_repo.working_tree_dir)
    return git_repo


def _branches(repo):
    return sorted(head.name for head in repo.heads)


class TestArgs:
    """Test argument parsing."""

    def test_defaults(self):
        args = parse_args([])

        assert args.main_branch == "main"
        assert args.remote == "origin"
        assert args.workers is None
        assert not args.dry_run

    def test_flags(self):
        args = parse_args(["--no-fetch", "--no-fast-forward", "--workers", "3", "--remote", "upstream"])

        assert args.no_fetch and args.no_fast_forward
        assert args.workers == 3
        assert args.remote == "upstream"

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            parse_args(["--version"])

        assert "git-broom" in capsys.readouterr().out


class TestSweep:
    """Test the non-interactive sweep end to end."""

    def test_dry_run_keeps_branches(self, sweep_repo, capsys):
        exit_code = main(["--no-interactive", "--dry-run"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "would be deleted" in output
        assert "done (merged)" in output
        assert "wip" in output
        assert _branches(sweep_repo) == ["done", "main", "wip"]

    def test_force_deletes_merged_branches_only(self, sweep_repo, capsys):
        exit_code = main(["--no-interactive", "--force"])

        assert exit_code == 0
        assert "Deleted done" in capsys.readouterr().out
        assert _branches(sweep_repo) == ["main", "wip"]

    def test_declined_confirmation(self, sweep_repo, monkeypatch, capsys):
        monkeypatch.setattr("git_broom.cli.sweep.Confirm.ask", lambda *args, **kwargs: False)

        exit_code = main(["--no-interactive", "--no-fetch"])

        assert exit_code == 0
        assert "cancelled" in capsys.readouterr().out
        assert _branches(sweep_repo) == ["done", "main", "wip"]

    def test_nothing_to_sweep(self, git_repo, origin, monkeypatch, capsys):
        monkeypatch.chdir(git_repo.working_tree_dir)

        assert main(["--no-interactive"]) == 0
        assert "Nothing to sweep" in capsys.readouterr().out

    def test_interactive_selection_is_used(self, sweep_repo, monkeypatch):
        monkeypatch.setattr("git_broom.tui.SweepApp.run", lambda self: ["wip"])

        assert main(["--interactive", "--force", "--no-fetch"]) == 0
        assert _branches(sweep_repo) == ["done", "main"]


class TestErrors:
    """Test fatal environment errors."""

    def test_not_in_repository(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)

        assert main(["--no-interactive"]) == 1
        assert "Not in a git repository" in capsys.readouterr().out

    def test_missing_remote(self, git_repo, monkeypatch, capsys):
        monkeypatch.chdir(git_repo.working_tree_dir)

        assert main(["--no-interactive"]) == 1
        assert "origin" in capsys.readouterr().out

    def test_invalid_workers(self, git_repo, monkeypatch, capsys):
        monkeypatch.chdir(git_repo.working_tree_dir)

        assert main(["--no-interactive", "--workers", "0"]) == 1
        assert "workers must be positive" in capsys.readouterr().out
