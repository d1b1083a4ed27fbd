"""Allow ``python -m gh_export``."""

from .cli import main

if __name__ == "__main__":
    main()
