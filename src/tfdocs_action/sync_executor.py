"""Documentation sync across target directories.

For each target directory terraform-docs is run and, when it writes into a
file (inject/replace), that file is staged. The run stops at the first
generator failure. Once every directory succeeded the number of changed
entries is counted and the final action is taken: commit and push, fail on
diff, or nothing.
"""

import logging
from pathlib import Path

from tfdocs_action.action_config import ActionConfig
from tfdocs_action.args_builder import build_directory_args
from tfdocs_action.generator import TerraformDocsRunner
from tfdocs_action.git_client import GitClient

logger = logging.getLogger(__name__)


class SyncExecutor:
    """Run terraform-docs over target directories and act on the result.

    Example:
        >>> executor = SyncExecutor(config, git, runner)
        >>> num_changed = executor.sync_all(["modules/vpc"], base_args)
        >>> exit_code = executor.finalize(num_changed)
    """

    def __init__(self, config: ActionConfig, git: GitClient, generator: TerraformDocsRunner):
        self.config = config
        self.git = git
        self.generator = generator

    def output_path(self, working_dir: str) -> str:
        """Path of the generated file for a directory, relative to the workspace."""
        return (Path(working_dir) / self.config.output_file).as_posix()

    def stage(self, path: str) -> bool:
        """Stage a generated file.

        Staging an unchanged file is a no-op and is reported as such.

        Returns:
            True if the file now shows up as a change
        """
        self.git.add(path)
        if self.git.is_path_changed(path):
            logger.debug(f"Added {path} to git staging area")
            return True
        logger.debug(f"No change in {path} detected")
        return False

    def sync_directory(self, base_args: tuple[str, ...], working_dir: str) -> None:
        """Generate documentation for one directory.

        Raises:
            GeneratorError: If terraform-docs fails
            GitError: If staging fails
        """
        logger.debug(f"working_dir={working_dir}")
        exec_args = build_directory_args(base_args, self.config, working_dir)
        self.generator.run(exec_args)

        if self.config.writes_output_file:
            self.stage(self.output_path(working_dir))

    def sync_all(self, targets: list[str], base_args: tuple[str, ...]) -> int:
        """Generate documentation for every target, in order.

        Args:
            targets: Target directories
            base_args: Shared argument prefix

        Returns:
            Number of added/modified entries in the repository afterwards

        Raises:
            GeneratorError: On the first failing directory; later ones are skipped
        """
        for working_dir in targets:
            self.sync_directory(base_args, working_dir)
        return self.git.count_changes()

    def commit_and_push(self, num_changed: int) -> None:
        """Commit staged documentation and push it.

        Nothing is committed or pushed when there are no changes.

        Raises:
            GitError: If commit or push fails
        """
        if num_changed == 0:
            logger.debug("No files changed, skipping commit")
            return

        logger.debug("Following files will be committed")
        logger.info(self.git.status_short().rstrip("\n"))

        self.git.commit(self.config.git_commit_message, sign_off=self.config.git_push_sign_off)
        self.git.push()

    def finalize(self, num_changed: int) -> int:
        """Take the final action for the run.

        Args:
            num_changed: Change counter from sync_all

        Returns:
            Process exit code
        """
        if self.config.git_push:
            self.commit_and_push(num_changed)
            return 0

        if self.config.fail_on_diff and num_changed != 0:
            logger.error("Uncommitted change(s) has been found!")
            return 1

        return 0


__all__ = ["SyncExecutor"]
