"""Tests for the documentation sync executor.

Tests cover:
- Per-directory generation and staging
- Fail-fast on generator errors
- Final decision: push, fail-on-diff, nothing
"""

from unittest.mock import call

import pytest

from tfdocs_action.generator import GeneratorError
from tfdocs_action.git_client import GitError
from tfdocs_action.sync_executor import SyncExecutor

BASE_ARGS = ("markdown", "table", "--indent", "2")


class TestSyncDirectory:
    """Test a single directory step."""

    def test_generator_called_with_directory_last(self, make_config, mock_git, mock_generator):
        executor = SyncExecutor(make_config(), mock_git, mock_generator)

        executor.sync_directory(BASE_ARGS, "modules/vpc")

        args = mock_generator.run.call_args[0][0]
        assert args[: len(BASE_ARGS)] == list(BASE_ARGS)
        assert args[-1] == "modules/vpc"

    def test_inject_stages_output_file(self, make_config, mock_git, mock_generator):
        config = make_config(output_method="inject", output_file="README.md")
        executor = SyncExecutor(config, mock_git, mock_generator)

        executor.sync_directory(BASE_ARGS, "modules/vpc")

        mock_git.add.assert_called_once_with("modules/vpc/README.md")

    def test_root_directory_output_path(self, make_config, mock_git, mock_generator):
        executor = SyncExecutor(make_config(output_method="replace"), mock_git, mock_generator)

        executor.sync_directory(BASE_ARGS, ".")

        mock_git.add.assert_called_once_with("README.md")

    def test_print_does_not_stage(self, make_config, mock_git, mock_generator):
        executor = SyncExecutor(make_config(output_method="print"), mock_git, mock_generator)

        executor.sync_directory(BASE_ARGS, "modules/vpc")

        mock_git.add.assert_not_called()

    def test_none_generates_without_output_mode(self, make_config, mock_git, mock_generator):
        executor = SyncExecutor(make_config(output_method="none"), mock_git, mock_generator)

        executor.sync_directory(BASE_ARGS, "modules/vpc")

        args = mock_generator.run.call_args[0][0]
        assert "--output-mode" not in args
        assert "--output-file" not in args
        assert args[-1] == "modules/vpc"
        mock_git.add.assert_not_called()

    def test_stage_reports_unchanged_file(self, make_config, mock_git, mock_generator):
        mock_git.is_path_changed.return_value = False
        executor = SyncExecutor(make_config(), mock_git, mock_generator)

        assert executor.stage("modules/vpc/README.md") is False

    def test_stage_reports_changed_file(self, make_config, mock_git, mock_generator):
        mock_git.is_path_changed.return_value = True
        executor = SyncExecutor(make_config(), mock_git, mock_generator)

        assert executor.stage("modules/vpc/README.md") is True


class TestSyncAll:
    """Test multi-directory processing."""

    def test_directories_processed_in_order(self, make_config, mock_git, mock_generator):
        executor = SyncExecutor(make_config(), mock_git, mock_generator)

        executor.sync_all(["a", "b"], BASE_ARGS)

        assert [c[0][0][-1] for c in mock_generator.run.call_args_list] == ["a", "b"]

    def test_returns_change_counter(self, make_config, mock_git, mock_generator):
        mock_git.count_changes.return_value = 2
        executor = SyncExecutor(make_config(), mock_git, mock_generator)

        assert executor.sync_all(["a", "b"], BASE_ARGS) == 2

    def test_fail_fast_on_second_directory(self, make_config, mock_git, mock_generator):
        mock_generator.run.side_effect = [None, GeneratorError("b", 2), None]
        executor = SyncExecutor(make_config(), mock_git, mock_generator)

        with pytest.raises(GeneratorError) as exc_info:
            executor.sync_all(["a", "b", "c"], BASE_ARGS)

        assert exc_info.value.returncode == 2
        assert mock_generator.run.call_count == 2
        assert mock_git.add.call_args_list == [call("a/README.md")]
        mock_git.count_changes.assert_not_called()
        mock_git.commit.assert_not_called()


class TestFinalize:
    """Test the final commit/push/fail decision."""

    def test_push_commits_and_pushes_changes(self, make_config, mock_git, mock_generator):
        config = make_config(git_push=True, git_commit_message="docs: update")
        executor = SyncExecutor(config, mock_git, mock_generator)

        assert executor.finalize(2) == 0

        mock_git.commit.assert_called_once_with("docs: update", sign_off=False)
        mock_git.push.assert_called_once()

    def test_push_with_sign_off(self, make_config, mock_git, mock_generator):
        config = make_config(git_push=True, git_push_sign_off=True)
        executor = SyncExecutor(config, mock_git, mock_generator)

        executor.finalize(1)

        assert mock_git.commit.call_args[1]["sign_off"] is True

    def test_push_skipped_without_changes(self, make_config, mock_git, mock_generator):
        executor = SyncExecutor(make_config(git_push=True), mock_git, mock_generator)

        assert executor.finalize(0) == 0

        mock_git.commit.assert_not_called()
        mock_git.push.assert_not_called()

    def test_push_failure_propagates(self, make_config, mock_git, mock_generator):
        mock_git.push.side_effect = GitError("rejected", returncode=1)
        executor = SyncExecutor(make_config(git_push=True), mock_git, mock_generator)

        with pytest.raises(GitError):
            executor.finalize(1)

    def test_push_wins_over_fail_on_diff(self, make_config, mock_git, mock_generator):
        config = make_config(git_push=True, fail_on_diff=True)
        executor = SyncExecutor(config, mock_git, mock_generator)

        assert executor.finalize(3) == 0

    def test_fail_on_diff_with_changes(self, make_config, mock_git, mock_generator):
        executor = SyncExecutor(make_config(fail_on_diff=True), mock_git, mock_generator)

        assert executor.finalize(2) == 1

        mock_git.commit.assert_not_called()

    def test_fail_on_diff_without_changes(self, make_config, mock_git, mock_generator):
        executor = SyncExecutor(make_config(fail_on_diff=True), mock_git, mock_generator)

        assert executor.finalize(0) == 0

    def test_changes_ignored_without_push_or_fail_on_diff(
        self, make_config, mock_git, mock_generator
    ):
        executor = SyncExecutor(make_config(), mock_git, mock_generator)

        assert executor.finalize(5) == 0
