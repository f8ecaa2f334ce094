"""Allow running the suite with ``python -m vttsuite``."""

from vttsuite.ui.cli import main

if __name__ == '__main__':
    main()
