"""tfdocs-action - terraform-docs automation for CI pipelines

Philosophy:
- Ruthless simplicity
- Brick architecture (self-contained modules)
- Fail fast with helpful guidance

tfdocs-action runs terraform-docs over one or more Terraform directories,
stages the generated documentation with git, and optionally commits and
pushes the result or fails the build when documentation is out of date.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
