"""Action configuration module.

This module holds the immutable configuration for a single tfdocs-action run.
Values come from the GitHub Action inputs (``INPUT_*`` environment variables)
or the equivalent command-line options, and are collected exactly once at
process start.

Path-like inputs (atlantis file, find dir, config file) use the literal
value ``disabled`` to switch the feature off, matching the action inputs.
"""

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Sentinel used by the action inputs to switch a path-like option off
DISABLED = "disabled"

DEFAULT_GIT_PUSH_USER_NAME = "github-actions[bot]"
DEFAULT_GIT_PUSH_USER_EMAIL = "github-actions[bot]@users.noreply.github.com"
DEFAULT_COMMIT_MESSAGE = "terraform-docs: automated action"

OUTPUT_METHODS = ("none", "inject", "replace", "print")
# Output methods that write a file which has to be staged afterwards
FILE_OUTPUT_METHODS = ("inject", "replace")


class ConfigError(Exception):
    """Raised when the action configuration is invalid."""

    pass


@dataclass(frozen=True)
class ActionConfig:
    """tfdocs-action configuration data."""

    working_dir: str = "."
    atlantis_file: str = DISABLED
    find_dir: str = DISABLED
    recursive: bool = False
    recursive_path: str = "modules"
    output_format: str = "markdown table"
    output_method: str = "inject"
    output_file: str = "README.md"
    template: str = ""
    args: str = ""
    indention: str = "2"
    config_file: str = DISABLED
    git_push: bool = False
    git_push_user_name: str = DEFAULT_GIT_PUSH_USER_NAME
    git_push_user_email: str = DEFAULT_GIT_PUSH_USER_EMAIL
    git_commit_message: str = DEFAULT_COMMIT_MESSAGE
    git_push_sign_off: bool = False
    fail_on_diff: bool = False
    workspace: Path = Path(".")
    terraform_docs_bin: str = "terraform-docs"

    @property
    def config_file_enabled(self) -> bool:
        """True when a terraform-docs config file should be passed."""
        return bool(self.config_file) and self.config_file != DISABLED

    @property
    def find_dir_enabled(self) -> bool:
        """True when directories should be discovered by searching for .tf files."""
        return bool(self.find_dir) and self.find_dir != DISABLED

    @property
    def writes_output_file(self) -> bool:
        """True when terraform-docs writes into output_file (inject or replace)."""
        return self.output_method in FILE_OUTPUT_METHODS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (workspace rendered as a string)."""
        data = asdict(self)
        data["workspace"] = str(self.workspace)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActionConfig":
        """Create configuration from a dictionary of raw input values.

        Empty strings for the git identity fall back to the bot identity, and
        ``git_sub_dir`` (when present) is appended to the workspace root.

        Args:
            data: Mapping of option name to value

        Returns:
            Validated ActionConfig

        Raises:
            ConfigError: If a value is invalid
        """
        workspace = Path(data.get("workspace") or Path.cwd())
        git_sub_dir = data.get("git_sub_dir")
        if git_sub_dir:
            workspace = workspace / git_sub_dir
            logger.info(f"Using non-standard GITHUB_WORKSPACE of {workspace}")

        config = cls(
            working_dir=data.get("working_dir") or ".",
            atlantis_file=data.get("atlantis_file") or DISABLED,
            find_dir=data.get("find_dir") or DISABLED,
            recursive=bool(data.get("recursive", False)),
            recursive_path=data.get("recursive_path", "modules") or "",
            output_format=data.get("output_format", "markdown table") or "",
            output_method=data.get("output_method") or "inject",
            output_file=data.get("output_file") or "README.md",
            template=data.get("template") or "",
            args=data.get("args") or "",
            indention=str(data.get("indention") or "2"),
            config_file=data.get("config_file") or DISABLED,
            git_push=bool(data.get("git_push", False)),
            git_push_user_name=data.get("git_push_user_name") or DEFAULT_GIT_PUSH_USER_NAME,
            git_push_user_email=data.get("git_push_user_email") or DEFAULT_GIT_PUSH_USER_EMAIL,
            git_commit_message=data.get("git_commit_message") or DEFAULT_COMMIT_MESSAGE,
            git_push_sign_off=bool(data.get("git_push_sign_off", False)),
            fail_on_diff=bool(data.get("fail_on_diff", False)),
            workspace=workspace,
            terraform_docs_bin=data.get("terraform_docs_bin") or "terraform-docs",
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Validate configuration fields.

        Output format checks live in the argument builder because they only
        apply when no terraform-docs config file is used.

        Raises:
            ConfigError: If validation fails
        """
        if self.output_method not in OUTPUT_METHODS:
            raise ConfigError(
                f"Invalid output method '{self.output_method}'. "
                f"Expected one of: {', '.join(OUTPUT_METHODS)}"
            )

        if self.writes_output_file and not self.output_file.strip():
            raise ConfigError(f"Output file is required for output method '{self.output_method}'")

        if self.git_push and not self.git_commit_message.strip():
            raise ConfigError("Commit message cannot be empty when git push is enabled")


__all__ = [
    "DEFAULT_COMMIT_MESSAGE",
    "DEFAULT_GIT_PUSH_USER_EMAIL",
    "DEFAULT_GIT_PUSH_USER_NAME",
    "DISABLED",
    "ActionConfig",
    "ConfigError",
]
