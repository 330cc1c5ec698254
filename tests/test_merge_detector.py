"""Tests for the three merge detection strategies."""

from pathlib import Path

import pytest

from git_broom.services.git.gateway import CommandResult, GitCommandGateway
from git_broom.services.git.merge_detector import MergeDetector


@pytest.fixture
def detector(git_repo, mock_config):
    """MergeDetector running against the test repository."""
    return MergeDetector(GitCommandGateway(git_repo.working_tree_dir), mock_config)


class TestAncestryStrategy:
    """Strategy 1: the branch tip is reachable from main."""

    def test_merge_commit(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature/merged")
        commit_file(git_repo, "merged.txt", "merged\n")
        git_repo.git.checkout("main")
        git_repo.git.merge("feature/merged", "--no-ff", "-m", "Merge feature/merged")

        assert detector._check_ancestry("feature/merged", "main") is True
        assert detector.is_branch_merged("feature/merged", "main") is True
        assert detector.get_merge_stats() == "Merges detected by: Ancestry: 1"

    def test_fast_forward_merge(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature/ff")
        commit_file(git_repo, "ff.txt", "ff\n")
        git_repo.git.checkout("main")
        git_repo.git.merge("feature/ff", "--ff-only")

        assert detector.is_branch_merged("feature/ff", "main") is True

    def test_branch_without_commits_is_merged(self, git_repo, detector):
        git_repo.git.branch("feature/empty")

        assert detector.is_branch_merged("feature/empty", "main") is True


class TestEquivalentPatchStrategy:
    """Strategy 2: every branch commit has a patch-equivalent commit on main."""

    def test_rebased_branch(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature/rebased")
        commit_file(git_repo, "rebased.txt", "rebased\n")
        git_repo.git.checkout("main")
        commit_file(git_repo, "other.txt", "other\n")
        # Replay the branch commit onto main, as a rebase merge would
        git_repo.git.cherry_pick("feature/rebased")

        assert detector._check_ancestry("feature/rebased", "main") is False
        assert detector._check_equivalent_patches("feature/rebased", "main") is True
        assert detector.is_branch_merged("feature/rebased", "main") is True
        assert "Equivalent patches: 1" in detector.get_merge_stats()

    def test_unique_commit_is_not_equivalent(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature/unique")
        commit_file(git_repo, "unique.txt", "unique\n")
        git_repo.git.checkout("main")

        assert detector._check_equivalent_patches("feature/unique", "main") is False


class TestContentEquivalenceStrategy:
    """Strategy 3: every touched file has identical content on main."""

    def _squash_merge(self, repo, branch):
        repo.git.checkout("main")
        repo.git.merge("--squash", branch)
        repo.git.commit("-m", f"Squash {branch}")

    def test_multi_commit_squash_merge(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature/squashed")
        commit_file(git_repo, "a.txt", "version 1\n")
        commit_file(git_repo, "a.txt", "version 2\n")
        commit_file(git_repo, "b.txt", "b\n")
        git_repo.git.checkout("main")
        commit_file(git_repo, "other.txt", "other\n")
        self._squash_merge(git_repo, "feature/squashed")

        assert detector._check_ancestry("feature/squashed", "main") is False
        assert detector._check_equivalent_patches("feature/squashed", "main") is False
        assert detector._check_content_equivalence("feature/squashed", "main") is True
        assert detector.is_branch_merged("feature/squashed", "main") is True
        assert "Identical content: 1" in detector.get_merge_stats()

    def test_single_file_squash_merge(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature")
        commit_file(git_repo, "feature.txt", "feature\n")
        self._squash_merge(git_repo, "feature")

        assert detector.is_branch_merged("feature", "main") is True

    def test_content_changed_after_squash(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature/diverged")
        commit_file(git_repo, "a.txt", "one\n")
        commit_file(git_repo, "b.txt", "two\n")
        self._squash_merge(git_repo, "feature/diverged")
        git_repo.git.checkout("feature/diverged")
        commit_file(git_repo, "b.txt", "three\n")
        git_repo.git.checkout("main")

        assert detector._check_content_equivalence("feature/diverged", "main") is False
        assert detector.is_branch_merged("feature/diverged", "main") is False

    def test_file_path_with_spaces(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature/spaces")
        commit_file(git_repo, "docs/my notes.txt", "first\n")
        commit_file(git_repo, "docs/my notes.txt", "second\n")
        self._squash_merge(git_repo, "feature/spaces")

        assert detector._check_content_equivalence("feature/spaces", "main") is True

    def test_branch_that_only_deletes_files(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature/cleanup")
        git_repo.git.rm("README.md")
        git_repo.git.commit("-m", "Remove readme")
        git_repo.git.checkout("main")

        assert detector._check_content_equivalence("feature/cleanup", "main") is False

    def test_unrelated_histories(self, git_repo, commit_file, detector):
        git_repo.git.checkout("--orphan", "feature/orphan")
        git_repo.git.rm("-rf", "--cached", ".")
        (Path(git_repo.working_tree_dir) / "README.md").unlink()
        commit_file(git_repo, "orphan.txt", "orphan\n")
        git_repo.git.checkout("main")

        assert detector._check_content_equivalence("feature/orphan", "main") is False
        assert detector.is_branch_merged("feature/orphan", "main") is False


class TestMergeDetectorCascade:
    """Test the ordered cascade as a whole."""

    def test_unmerged_branch(self, git_repo, commit_file, detector):
        git_repo.git.checkout("-b", "feature/open")
        commit_file(git_repo, "open.txt", "open\n")
        git_repo.git.checkout("main")

        assert detector.is_branch_merged("feature/open", "main") is False
        assert detector.get_merge_stats() == "No merges detected"

    def test_tag_with_same_name_as_branch(self, git_repo, commit_file, detector):
        # The tag sits on main, so resolving the bare name would look merged
        git_repo.git.tag("release")
        git_repo.git.checkout("-b", "release")
        commit_file(git_repo, "release.txt", "release\n")
        git_repo.git.checkout("main")

        assert detector._check_ancestry("release", "main") is False
        assert detector._check_equivalent_patches("release", "main") is False
        assert detector.is_branch_merged("release", "main") is False

    def test_main_branch_is_never_merged_into_itself(self, detector):
        assert detector.is_branch_merged("main", "main") is False

    def test_nonexistent_branch(self, detector):
        assert detector.is_branch_merged("does-not-exist", "main") is False

    def test_command_failures_are_not_merged(self, fake_gateway, mock_config):
        detector = MergeDetector(fake_gateway, mock_config)

        assert detector.is_branch_merged("feature", "main") is False
        # Every strategy was attempted despite the failures
        commands = [call[0] for call in fake_gateway.calls]
        assert commands == ["merge-base", "rev-list", "merge-base"]

    def test_strategy_exception_falls_through(self, mock_config):
        class ExplodingGateway:
            def __init__(self):
                self.calls = 0

            def run(self, args):
                self.calls += 1
                if args[0] == "rev-list":
                    raise RuntimeError("boom")
                return CommandResult(success=False, stdout="")

        gateway = ExplodingGateway()
        detector = MergeDetector(gateway, mock_config)

        assert detector.is_branch_merged("feature", "main") is False
        assert gateway.calls == 3

    def test_first_success_short_circuits(self, fake_gateway, mock_config):
        key = ("merge-base", "--is-ancestor", "refs/heads/feature", "refs/heads/main")
        fake_gateway.responses[key] = CommandResult(success=True, stdout="")
        detector = MergeDetector(fake_gateway, mock_config)

        assert detector.is_branch_merged("feature", "main") is True
        assert len(fake_gateway.calls) == 1

    def test_cherry_mark_output_parsing(self, fake_gateway, mock_config):
        key = (
            "rev-list", "--cherry-mark", "--right-only", "--no-merges",
            "refs/heads/main...refs/heads/feature", "--",
        )
        fake_gateway.responses[key] = CommandResult(success=True, stdout="=abc123\n=def456")
        detector = MergeDetector(fake_gateway, mock_config)

        assert detector._check_equivalent_patches("feature", "main") is True

        fake_gateway.responses[key] = CommandResult(success=True, stdout="=abc123\n+def456")
        assert detector._check_equivalent_patches("feature", "main") is False
