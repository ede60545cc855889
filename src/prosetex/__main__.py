"""Allow ``python -m prosetex``."""

from prosetex.ui.cli import main


if __name__ == "__main__":
    main()
