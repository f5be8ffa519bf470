"""terraform-docs invocation.

Runs the generator binary in the workspace and lets its output stream
straight into the job log. There is no timeout: the run waits for the
generator however long it takes.
"""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GeneratorError(Exception):
    """Raised when terraform-docs exits non-zero."""

    def __init__(self, working_dir: str, returncode: int):
        self.working_dir = working_dir
        self.returncode = returncode
        super().__init__(f"terraform-docs failed for {working_dir} with exit code {returncode}")


class TerraformDocsRunner:
    """Invoke terraform-docs with a prepared argument list."""

    def __init__(self, cwd: Path, binary: str = "terraform-docs"):
        self.cwd = Path(cwd)
        self.binary = binary

    def run(self, args: list[str]) -> None:
        """Run the generator.

        Args:
            args: Arguments for terraform-docs; the last one is the target directory

        Raises:
            GeneratorError: If the generator exits non-zero (127 if it is missing)
        """
        working_dir = args[-1] if args else "."
        cmd = [self.binary, *args]
        logger.debug(" ".join(cmd))

        try:
            result = subprocess.run(cmd, cwd=self.cwd, check=False)
        except FileNotFoundError as e:
            raise GeneratorError(working_dir, 127) from e

        if result.returncode != 0:
            raise GeneratorError(working_dir, result.returncode)


__all__ = ["GeneratorError", "TerraformDocsRunner"]
