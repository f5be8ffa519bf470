"""terraform-docs argument assembly.

The shared prefix (format, extra args, indent) is built once per run as a
tuple. Every target directory gets a fresh list built from that prefix, so
per-directory flags never leak into the next directory.
"""

import logging
from pathlib import Path

from tfdocs_action.action_config import ActionConfig, ConfigError

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = frozenset(
    {
        "asciidoc",
        "asciidoc table",
        "asciidoc document",
        "markdown",
        "markdown table",
        "markdown document",
    }
)

DEFAULT_TEMPLATE = "<!-- BEGIN_TF_DOCS -->\n{{ .Content }}\n<!-- END_TF_DOCS -->"


def effective_template(config: ActionConfig) -> str:
    """Template passed to terraform-docs.

    Without a config file and without an explicit template, the default
    BEGIN/END marker wrapper is used.
    """
    if not config.config_file_enabled and not config.template:
        return DEFAULT_TEMPLATE
    return config.template


def build_base_args(config: ActionConfig) -> tuple[str, ...]:
    """Build the argument prefix shared by every target directory.

    Args:
        config: Action configuration

    Returns:
        Tuple of arguments: output format words, extra args, then --indent

    Raises:
        ConfigError: If no config file is used and the output format is not
            one of SUPPORTED_FORMATS
    """
    args: list[str] = []
    args.extend(config.output_format.split())
    # Extra args come after the format so repeated flags override it
    args.extend(config.args.split())

    if not config.config_file_enabled:
        if config.output_format not in SUPPORTED_FORMATS:
            raise ConfigError("No output format defined")
        args.extend(["--indent", config.indention])

        if not config.template:
            logger.debug(f"Define default template: {DEFAULT_TEMPLATE!r}")

    return tuple(args)


def resolve_config_file(config: ActionConfig, working_dir: str) -> Path:
    """Locate the terraform-docs config file for a target directory.

    A config file that exists relative to the workspace is used as-is;
    otherwise it is taken relative to the target directory.
    """
    candidate = config.workspace / config.config_file
    if candidate.is_file():
        return candidate.absolute()
    return (config.workspace / working_dir / config.config_file).absolute()


def build_directory_args(
    base_args: tuple[str, ...], config: ActionConfig, working_dir: str
) -> list[str]:
    """Build the full terraform-docs argument list for one directory.

    Args:
        base_args: Shared prefix from build_base_args
        config: Action configuration
        working_dir: Target directory (relative to the workspace)

    Returns:
        New list ending with working_dir
    """
    exec_args = list(base_args)

    if config.config_file_enabled:
        config_file = resolve_config_file(config, working_dir)
        logger.debug(f"config_file={config_file}")
        exec_args.extend(["--config", str(config_file)])

    if config.writes_output_file:
        logger.debug(f"output_mode={config.output_method}")
        logger.debug(f"output_file={config.output_file}")
        exec_args.extend(["--output-mode", config.output_method])
        exec_args.extend(["--output-file", config.output_file])

    template = effective_template(config)
    if template:
        exec_args.extend(["--output-template", template])

    if config.recursive and config.recursive_path:
        exec_args.append("--recursive")
        exec_args.extend(["--recursive-path", config.recursive_path])

    exec_args.append(working_dir)
    return exec_args


__all__ = [
    "DEFAULT_TEMPLATE",
    "SUPPORTED_FORMATS",
    "build_base_args",
    "build_directory_args",
    "effective_template",
    "resolve_config_file",
]
