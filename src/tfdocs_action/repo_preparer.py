"""Repository preparation.

Makes the checkout usable from inside the action container and pins the
git identity used for the documentation commit:

- Trust the workspace (safe.directory), since the runner mounts it with a
  different owner than the container user
- Override global user.name/user.email when they differ from the
  configured identity, and register a restore for each override
- Shallow-fetch tags (failures tolerated)
"""

import logging
from dataclasses import dataclass, field

from tfdocs_action.action_config import ActionConfig
from tfdocs_action.cleanup import CleanupStack
from tfdocs_action.git_client import GitClient

logger = logging.getLogger(__name__)


@dataclass
class IdentityBackup:
    """Original global git identity values that were overridden.

    Only overridden keys appear in ``values``; a value of None means the
    key was not set before the run.
    """

    values: dict[str, str | None] = field(default_factory=dict)

    @property
    def overridden(self) -> list[str]:
        return list(self.values)


def restore_identity(git: GitClient, key: str, value: str | None) -> None:
    """Put back a global identity value (unset it if there was none)."""
    if value is None:
        git.unset_global_config(key)
    else:
        git.set_global_config(key, value)


def override_identity(
    git: GitClient, key: str, wanted: str, cleanups: CleanupStack, backup: IdentityBackup
) -> None:
    """Set a global identity key and register its restore, if it differs."""
    current = git.get_global_config(key)
    if current == wanted:
        return

    git.set_global_config(key, wanted)
    backup.values[key] = current
    cleanups.register(restore_identity, git, key, current)


def prepare_repository(
    git: GitClient, config: ActionConfig, cleanups: CleanupStack
) -> IdentityBackup:
    """Prepare the workspace repository for the sync.

    Args:
        git: Git client bound to the workspace
        config: Action configuration (identity values)
        cleanups: Stack receiving the identity restore actions

    Returns:
        IdentityBackup with the values that will be restored at exit

    Raises:
        GitError: If reading or writing the git identity fails
    """
    git.add_safe_directory(config.workspace)

    backup = IdentityBackup()
    override_identity(git, "user.name", config.git_push_user_name, cleanups, backup)
    override_identity(git, "user.email", config.git_push_user_email, cleanups, backup)

    git.fetch_tags()
    return backup


__all__ = ["IdentityBackup", "prepare_repository", "restore_identity"]
