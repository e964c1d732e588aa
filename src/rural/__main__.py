"""Entry point for ``python -m rural``."""

from rural.cli import main

if __name__ == "__main__":
    main()
