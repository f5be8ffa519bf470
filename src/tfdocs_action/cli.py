"""CLI entry point for tfdocs-action.

Every option can also be supplied through the environment variable GitHub
Actions uses for the matching action input (``INPUT_<NAME>``), so the same
command works as a container entrypoint and from a shell.
"""

import logging
import sys

import click

from tfdocs_action import __version__
from tfdocs_action.action_config import (
    DEFAULT_COMMIT_MESSAGE,
    DISABLED,
    OUTPUT_METHODS,
    ActionConfig,
    ConfigError,
)
from tfdocs_action.workflow import run_action
from tfdocs_action.workflow_commands import configure_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.command(
    name="tfdocs-action",
    context_settings={"help_option_names": ["--help", "-h"], "show_default": True},
)
@click.option("--working-dir", envvar="INPUT_WORKING_DIR", default=".",
              help="Comma separated list of directories to generate docs for")
@click.option("--atlantis-file", envvar="INPUT_ATLANTIS_FILE", default=DISABLED,
              help="Atlantis project file listing the directories")
@click.option("--find-dir", envvar="INPUT_FIND_DIR", default=DISABLED,
              help="Search this directory for Terraform modules")
@click.option("--recursive/--no-recursive", envvar="INPUT_RECURSIVE", default=False,
              help="Let terraform-docs update submodules recursively")
@click.option("--recursive-path", envvar="INPUT_RECURSIVE_PATH", default="modules",
              help="Submodules path for recursive mode")
@click.option("--output-format", envvar="INPUT_OUTPUT_FORMAT", default="markdown table",
              help="terraform-docs output format")
@click.option("--output-method", envvar="INPUT_OUTPUT_METHOD", default="inject",
              type=click.Choice(OUTPUT_METHODS), help="How the output file is written")
@click.option("--output-file", envvar="INPUT_OUTPUT_FILE", default="README.md",
              help="File in each directory receiving the documentation")
@click.option("--template", envvar="INPUT_TEMPLATE", default="",
              help="Output template (default: BEGIN/END_TF_DOCS markers)")
@click.option("--args", "extra_args", envvar="INPUT_ARGS", default="",
              help="Additional arguments for terraform-docs")
@click.option("--indention", envvar="INPUT_INDENTION", default="2",
              help="Indentation level of Markdown/AsciiDoc sections")
@click.option("--config-file", envvar="INPUT_CONFIG_FILE", default=DISABLED,
              help="terraform-docs config file")
@click.option("--git-push/--no-git-push", envvar="INPUT_GIT_PUSH", default=False,
              help="Commit and push the documentation changes")
@click.option("--git-push-user-name", envvar="INPUT_GIT_PUSH_USER_NAME", default="",
              help="git user.name for the commit (default: github-actions[bot])")
@click.option("--git-push-user-email", envvar="INPUT_GIT_PUSH_USER_EMAIL", default="",
              help="git user.email for the commit")
@click.option("--git-commit-message", envvar="INPUT_GIT_COMMIT_MESSAGE",
              default=DEFAULT_COMMIT_MESSAGE, help="Commit message")
@click.option("--git-push-sign-off/--no-git-push-sign-off", envvar="INPUT_GIT_PUSH_SIGN_OFF",
              default=False, help="Add a Signed-off-by trailer to the commit")
@click.option("--fail-on-diff/--no-fail-on-diff", envvar="INPUT_FAIL_ON_DIFF", default=False,
              help="Fail when documentation changes are left uncommitted")
@click.option("--git-sub-dir", envvar="INPUT_GIT_SUB_DIR", default="",
              help="Repository sub directory inside the workspace")
@click.option("--workspace", envvar="GITHUB_WORKSPACE", default=None,
              type=click.Path(file_okay=False), help="Workspace root (default: current directory)")
@click.option("--terraform-docs-bin", envvar="TERRAFORM_DOCS_BIN", default="terraform-docs",
              help="terraform-docs executable")
@click.option("--log-level", envvar="TFDOCS_LOG_LEVEL", default="DEBUG",
              type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Log level")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, extra_args: str, log_level: str, **options: object) -> None:
    """Generate terraform-docs documentation and sync it with git.

    \b
    Directories are taken from, in order of precedence:
        1. the atlantis file (--atlantis-file), when it exists
        2. a search for *.tf files (--find-dir)
        3. the comma separated --working-dir list

    \b
    EXAMPLES:
        # Update README.md of two modules
        $ tfdocs-action --working-dir modules/vpc,modules/eks

        # Fail the build when docs are out of date
        $ tfdocs-action --find-dir modules --fail-on-diff

        # Commit and push updated docs
        $ tfdocs-action --git-push --git-push-sign-off
    """
    configure_logging(log_level.upper())

    try:
        config = ActionConfig.from_dict({**options, "args": extra_args})
    except ConfigError as e:
        logger.error(str(e))
        ctx.exit(1)
        return

    logger.debug(f"Configuration: {config.to_dict()}")
    ctx.exit(run_action(config))


if __name__ == "__main__":
    sys.exit(main())
