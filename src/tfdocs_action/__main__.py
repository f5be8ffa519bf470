"""Allow running tfdocs-action as ``python -m tfdocs_action``."""

from tfdocs_action.cli import main

if __name__ == "__main__":
    main()
