"""Action workflow.

Wires the stages together in their fixed order and maps every failure to a
process exit code:

    build_base_args -> prerequisites -> prepare_repository ->
    resolve_targets -> sync_all -> num_changed output -> finalize

Exit codes:
    0    success
    1    configuration error, git error, target resolution error, fail-on-diff,
         I/O error (for example an unwritable $GITHUB_OUTPUT)
    N    terraform-docs exit code N
    127  missing git/terraform-docs binary
    130  interrupted (128 + signal number for SIGTERM)
"""

import logging

from tfdocs_action.action_config import ActionConfig, ConfigError
from tfdocs_action.args_builder import build_base_args
from tfdocs_action.cleanup import CleanupError, CleanupStack, Interrupted
from tfdocs_action.generator import GeneratorError, TerraformDocsRunner
from tfdocs_action.git_client import GitClient, GitError
from tfdocs_action.prerequisites import PrerequisiteChecker, PrerequisiteError
from tfdocs_action.repo_preparer import prepare_repository
from tfdocs_action.sync_executor import SyncExecutor
from tfdocs_action.target_resolver import TargetResolutionError, resolve_targets
from tfdocs_action.workflow_commands import set_output

logger = logging.getLogger(__name__)


def _sync(config: ActionConfig, base_args: tuple[str, ...]) -> int:
    git = GitClient(config.workspace)
    generator = TerraformDocsRunner(config.workspace, binary=config.terraform_docs_bin)

    with CleanupStack() as cleanups:
        backup = prepare_repository(git, config, cleanups)
        if backup.overridden:
            logger.debug(f"Overridden global git identity: {', '.join(backup.overridden)}")

        targets = resolve_targets(config)
        logger.debug(f"Target directories: {', '.join(targets) or '(none)'}")

        executor = SyncExecutor(config, git, generator)
        num_changed = executor.sync_all(targets, base_args)
        set_output("num_changed", num_changed)

        return executor.finalize(num_changed)


def run_action(config: ActionConfig) -> int:
    """Run the whole documentation sync.

    Args:
        config: Action configuration

    Returns:
        Process exit code
    """
    try:
        # Configuration problems abort before git or terraform-docs are touched
        base_args = build_base_args(config)
        if not config.workspace.is_dir():
            raise ConfigError(f"Workspace directory does not exist: {config.workspace}")

        PrerequisiteChecker.require(["git", config.terraform_docs_bin])
        return _sync(config, base_args)

    except ConfigError as e:
        logger.error(str(e))
        return 1
    except PrerequisiteError as e:
        logger.error(str(e))
        return PrerequisiteError.exit_code
    except GeneratorError as e:
        logger.error(str(e))
        return e.returncode
    except GitError as e:
        logger.error(str(e))
        return e.returncode or 1
    except TargetResolutionError as e:
        logger.error(str(e))
        return 1
    except CleanupError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1
    except Interrupted as e:
        logger.error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130


__all__ = ["run_action"]
