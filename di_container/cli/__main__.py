"""Allow di-container to be run as a module.

This enables running the CLI with `python -m di_container.cli`.
"""

from . import main

if __name__ == "__main__":
    main()
