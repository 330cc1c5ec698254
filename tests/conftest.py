"""Pytest fixtures for git-broom tests"""
import tempfile
from pathlib import Path
from threading import Lock

import git
import pytest

from git_broom.services.git.gateway import CommandResult


def _configure_identity(repo):
    """Commit identity and signing settings for throw-away repositories."""
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")


class FakeGateway:
    """In-memory CommandGateway returning canned results keyed by argument tuple."""

    def __init__(self, responses=None, default=None):
        self.responses = dict(responses or {})
        self.default = default or CommandResult(success=False, stdout="", stderr="fatal: unexpected command")
        self.calls = []
        self._lock = Lock()

    def run(self, args):
        with self._lock:
            self.calls.append(tuple(args))
        return self.responses.get(tuple(args), self.default)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'main_branch': 'main',
        'remote_name': 'origin',
        'verbose': False,
        'debug': False,
        'interactive': False,
        'dry_run': False,
        'force': False,
        'sequential': False,
        'workers': None,
    }


@pytest.fixture
def fake_gateway():
    """A FakeGateway where every command fails until responses are added."""
    return FakeGateway()


@pytest.fixture
def commit_file():
    """Write a file in a work tree and commit it on the checked-out branch."""
    def _commit(repo, name, content, message=None):
        path = Path(repo.working_tree_dir) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        repo.git.add("--", name)
        repo.git.commit("-m", message or f"Update {name}")
        return repo.head.commit.hexsha
    return _commit


@pytest.fixture
def git_repo(temp_dir, commit_file):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    _configure_identity(repo)

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def origin(git_repo, temp_dir):
    """Bare remote named origin, with main pushed and tracked."""
    origin_path = temp_dir / "origin.git"
    origin_repo = git.Repo.init(origin_path, bare=True)
    origin_repo.git.symbolic_ref("HEAD", "refs/heads/main")
    git_repo.create_remote('origin', str(origin_path))
    git_repo.git.push('-u', 'origin', 'main')

    yield origin_repo

    origin_repo.close()


@pytest.fixture
def collaborator(origin, temp_dir):
    """A second clone of origin, used to push commits the test repository lacks."""
    clone = git.Repo.clone_from(origin.git_dir, temp_dir / "collaborator")
    _configure_identity(clone)

    yield clone

    clone.close()


@pytest.fixture
def push_remote_commit(collaborator, commit_file):
    """Commit on a branch in the collaborator clone and push it to origin."""
    def _push(branch, name, content):
        collaborator.git.fetch('origin')
        collaborator.git.checkout('-B', branch, f'origin/{branch}')
        commit_file(collaborator, name, content, f"Remote change to {name}")
        collaborator.git.push('origin', branch)
    return _push


@pytest.fixture
def add_worktree(temp_dir):
    """Check a branch out in a linked worktree next to the repository."""
    def _add(repo, branch, name=None, detach=False):
        path = temp_dir / (name or f"wt-{branch.replace('/', '-')}")
        if detach:
            repo.git.worktree('add', '--detach', str(path), branch)
        else:
            repo.git.worktree('add', str(path), branch)
        return path
    return _add
