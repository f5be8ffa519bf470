"""Target directory resolution.

Exactly one strategy runs per invocation, in this order of precedence:

1. Atlantis project file present in the workspace: every ``projects[].dir``
   in file order (duplicates kept)
2. find_dir enabled: every directory under find_dir holding a ``.tf`` file
   (deduplicated, sorted traversal)
3. Otherwise: the comma-separated working_dir list
"""

import logging
import os
from pathlib import Path

try:
    import yaml
except ImportError:
    raise ImportError("PyYAML not available. Install with: pip install pyyaml")

from tfdocs_action.action_config import DISABLED, ActionConfig

logger = logging.getLogger(__name__)


class TargetResolutionError(Exception):
    """Raised when target directories cannot be determined."""

    pass


def atlantis_file_path(config: ActionConfig) -> Path | None:
    """Return the atlantis file path if the option is set and the file exists."""
    if not config.atlantis_file or config.atlantis_file == DISABLED:
        return None
    path = config.workspace / config.atlantis_file
    return path if path.is_file() else None


def dirs_from_atlantis_file(path: Path) -> list[str]:
    """Read project directories from an atlantis.yaml file.

    Args:
        path: atlantis.yaml path

    Returns:
        ``dir`` of every project, in file order

    Raises:
        TargetResolutionError: If the file is not valid YAML, has no projects
            list, or a project has no dir
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TargetResolutionError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise TargetResolutionError(f"Failed to read {path}: {e}") from e

    projects = data.get("projects") if isinstance(data, dict) else None
    if not isinstance(projects, list):
        raise TargetResolutionError(f"No projects list found in {path}")

    dirs = []
    for index, project in enumerate(projects):
        project_dir = project.get("dir") if isinstance(project, dict) else None
        if project_dir is None:
            raise TargetResolutionError(f"Project #{index} in {path} has no dir")
        dirs.append(str(project_dir).replace("- ", ""))
    return dirs


def dirs_with_terraform_files(workspace: Path, find_dir: str) -> list[str]:
    """Find every directory under find_dir that contains a .tf file.

    Paths are returned the way they are spelled under find_dir (for example
    ``modules/x``), relative to the workspace.

    Args:
        workspace: Workspace root
        find_dir: Directory to search, relative to the workspace

    Returns:
        Unique directories in traversal order
    """
    found: dict[str, None] = {}
    root = workspace / find_dir
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        if any(name.endswith(".tf") for name in filenames):
            relative = Path(find_dir) / Path(dirpath).relative_to(root)
            found.setdefault(relative.as_posix(), None)
    return list(found)


def dirs_from_list(working_dir: str) -> list[str]:
    """Split a comma-separated directory list, dropping empty entries."""
    return [segment.strip() for segment in working_dir.split(",") if segment.strip()]


def resolve_targets(config: ActionConfig) -> list[str]:
    """Determine the directories to document.

    Args:
        config: Action configuration

    Returns:
        Ordered list of target directories

    Raises:
        TargetResolutionError: If the atlantis file cannot be used
    """
    atlantis_path = atlantis_file_path(config)
    if atlantis_path is not None:
        logger.debug(f"Reading project directories from {atlantis_path}")
        return dirs_from_atlantis_file(atlantis_path)

    if config.find_dir_enabled:
        logger.debug(f"Searching {config.find_dir} for Terraform files")
        return dirs_with_terraform_files(config.workspace, config.find_dir)

    return dirs_from_list(config.working_dir)


__all__ = [
    "TargetResolutionError",
    "dirs_from_atlantis_file",
    "dirs_from_list",
    "dirs_with_terraform_files",
    "resolve_targets",
]
