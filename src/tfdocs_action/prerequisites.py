"""
Prerequisites Checker Module

Verifies the external tools the action drives are installed before any
git state is touched.

Security Requirements:
- Read-only system checks
- No subprocess calls (shutil.which only)
"""

import logging
import shutil
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class PrerequisiteResult:
    """Result of prerequisite checks."""

    all_available: bool
    missing: list[str]
    available: list[str]


class PrerequisiteError(Exception):
    """Raised when prerequisites are missing."""

    exit_code = 127


class PrerequisiteChecker:
    """
    Check required external tools are installed.

    Required tools:
    - git
    - terraform-docs (or the configured generator binary)
    """

    @classmethod
    def check_tool(cls, tool_name: str) -> bool:
        """
        Check if a single tool is available in PATH.

        Args:
            tool_name: Name of (or path to) the tool to check

        Returns:
            bool: True if tool is available
        """
        result = shutil.which(tool_name)
        if result:
            logger.debug(f"Found {tool_name} at {result}")
            return True
        logger.debug(f"Tool not found: {tool_name}")
        return False

    @classmethod
    def check_all(cls, tools: list[str]) -> PrerequisiteResult:
        """
        Check all tools and return a combined result.

        Args:
            tools: Tool names to look up

        Returns:
            PrerequisiteResult: Detailed check results
        """
        missing: list[str] = []
        available: list[str] = []

        for tool in tools:
            if cls.check_tool(tool):
                available.append(tool)
            else:
                missing.append(tool)

        return PrerequisiteResult(
            all_available=(len(missing) == 0),
            missing=missing,
            available=available,
        )

    @classmethod
    def require(cls, tools: list[str]) -> None:
        """
        Fail fast when any tool is missing.

        Raises:
            PrerequisiteError: Listing every missing tool
        """
        result = cls.check_all(tools)
        if not result.all_available:
            raise PrerequisiteError(f"Missing required tools: {', '.join(result.missing)}")


__all__ = ["PrerequisiteChecker", "PrerequisiteError", "PrerequisiteResult"]
