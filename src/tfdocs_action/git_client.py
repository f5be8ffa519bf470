"""Git command-line wrapper.

Thin wrapper around the ``git`` binary for the handful of operations the
action needs: global config get/set, safe.directory, shallow tag fetch,
status, add, commit and push.

Security:
- No shell=True
- Arguments passed as a list, never interpolated into a shell string
"""

import logging
import re
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# Porcelain status codes counted as a change: added or modified in the
# index or the work tree. Deletions and pure renames are not counted.
CHANGE_STATUS_PATTERN = re.compile(r"[MA]")


class GitError(Exception):
    """Raised when a git command fails."""

    def __init__(self, message: str, returncode: int = 1):
        self.returncode = returncode
        super().__init__(message)


class GitClient:
    """Run git commands inside a repository working tree.

    Example:
        >>> git = GitClient(Path("/github/workspace"))
        >>> git.add("modules/vpc/README.md")
        >>> git.count_changes()
        1
    """

    def __init__(self, cwd: Path, git_bin: str = "git"):
        self.cwd = Path(cwd)
        self.git_bin = git_bin

    def _run(
        self, args: list[str], check: bool = True, capture: bool = True
    ) -> subprocess.CompletedProcess[str]:
        """Run a git command.

        Args:
            args: Arguments after ``git``
            check: Raise GitError on non-zero exit
            capture: Capture stdout/stderr instead of streaming to the job log

        Returns:
            CompletedProcess with text output

        Raises:
            GitError: If the command fails and check is True
        """
        cmd = [self.git_bin, *args]
        logger.debug(" ".join(cmd))
        try:
            result = subprocess.run(
                cmd, cwd=self.cwd, capture_output=capture, text=True, check=False
            )
        except FileNotFoundError as e:
            raise GitError(f"git executable not found: {self.git_bin}", returncode=127) from e

        if check and result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise GitError(
                f"git {' '.join(args)} failed with exit code {result.returncode}: {stderr}",
                returncode=result.returncode,
            )
        return result

    def get_global_config(self, key: str) -> str | None:
        """Read a global config value.

        Returns:
            The value, or None when the key is not set

        Raises:
            GitError: On any failure other than "key not set"
        """
        result = self._run(["config", "--global", key], check=False)
        # git config exits 1 when the key does not exist
        if result.returncode == 1:
            return None
        if result.returncode != 0:
            raise GitError(
                f"Failed to read git config {key}: {result.stderr.strip()}",
                returncode=result.returncode,
            )
        return result.stdout.rstrip("\n")

    def set_global_config(self, key: str, value: str) -> None:
        """Write a global config value."""
        self._run(["config", "--global", key, value])
        logger.debug(f"git config --global '{key}' '{value}'")

    def unset_global_config(self, key: str) -> None:
        """Remove a global config value; a missing key is not an error."""
        result = self._run(["config", "--global", "--unset", key], check=False)
        # exit 5: key was not set
        if result.returncode not in (0, 5):
            raise GitError(
                f"Failed to unset git config {key}: {result.stderr.strip()}",
                returncode=result.returncode,
            )
        logger.debug(f"git config --global --unset '{key}'")

    def add_safe_directory(self, path: Path) -> None:
        """Trust a directory owned by a different user."""
        self._run(["config", "--global", "--add", "safe.directory", str(path)])

    def fetch_tags(self, remote: str = "origin") -> bool:
        """Shallow-fetch all tags from the remote.

        Returns:
            True on success, False when the fetch failed (tolerated)
        """
        result = self._run(
            ["fetch", "--depth=1", remote, "+refs/tags/*:refs/tags/*"], check=False
        )
        if result.returncode != 0:
            logger.warning(f"Failed to fetch tags from {remote}: {result.stderr.strip()}")
            return False
        return True

    def status_porcelain(self) -> list[str]:
        """Return ``git status --porcelain`` lines."""
        result = self._run(["status", "--porcelain"])
        return [line for line in result.stdout.splitlines() if line.strip()]

    def status_short(self) -> str:
        """Return ``git status -s`` output for display."""
        return self._run(["status", "-s"]).stdout

    @staticmethod
    def is_change(status_line: str) -> bool:
        """True if a porcelain line is an added or modified entry."""
        return bool(CHANGE_STATUS_PATTERN.search(status_line[:2]))

    @staticmethod
    def status_path(status_line: str) -> str:
        """Path part of a porcelain line (rename targets after ``->``)."""
        path = status_line[3:]
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        return path.strip('"')

    def count_changes(self) -> int:
        """Count added/modified entries in the repository status."""
        return sum(1 for line in self.status_porcelain() if self.is_change(line))

    def is_path_changed(self, path: str) -> bool:
        """True if the given path shows up as added/modified.

        Porcelain paths are relative to the repository root, so a path given
        relative to a sub directory of the repository matches by suffix.
        """
        normalized = Path(path).as_posix()
        for line in self.status_porcelain():
            if not self.is_change(line):
                continue
            changed = self.status_path(line)
            if changed == normalized or changed.endswith(f"/{normalized}"):
                return True
        return False

    def add(self, path: str) -> None:
        """Stage a path."""
        self._run(["add", path])

    def commit(self, message: str, sign_off: bool = False) -> None:
        """Commit the staged changes.

        Args:
            message: Commit message
            sign_off: Add a Signed-off-by trailer
        """
        args = ["commit", "-m", message]
        if sign_off:
            args.append("-s")
        self._run(args, capture=False)

    def push(self) -> None:
        """Push the current branch to its upstream."""
        self._run(["push"], capture=False)


__all__ = ["GitClient", "GitError"]
