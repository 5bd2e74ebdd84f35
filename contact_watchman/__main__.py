import sys

from contact_watchman.cli import main

if __name__ == "__main__":  # pragma: no cover - CLI bridge
    sys.exit(main())
