"""Tests for terraform-docs invocation."""

import subprocess
from unittest.mock import patch

import pytest

from tfdocs_action.generator import GeneratorError, TerraformDocsRunner


class TestTerraformDocsRunner:
    """Test generator process handling."""

    @patch("tfdocs_action.generator.subprocess.run")
    def test_runs_in_workspace(self, mock_run, tmp_path):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
        runner = TerraformDocsRunner(tmp_path)

        runner.run(["markdown", "table", "modules/vpc"])

        mock_run.assert_called_once_with(
            ["terraform-docs", "markdown", "table", "modules/vpc"], cwd=tmp_path, check=False
        )

    @patch("tfdocs_action.generator.subprocess.run")
    def test_non_zero_exit_raises_with_code(self, mock_run, tmp_path):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=2)
        runner = TerraformDocsRunner(tmp_path, binary="/usr/local/bin/terraform-docs")

        with pytest.raises(GeneratorError) as exc_info:
            runner.run(["markdown", "modules/vpc"])

        assert exc_info.value.returncode == 2
        assert exc_info.value.working_dir == "modules/vpc"

    @patch("tfdocs_action.generator.subprocess.run")
    def test_missing_binary_is_127(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError("terraform-docs")

        with pytest.raises(GeneratorError) as exc_info:
            TerraformDocsRunner(tmp_path).run(["."])

        assert exc_info.value.returncode == 127
