"""Allow running the package with ``python -m docker_container_inspector``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
