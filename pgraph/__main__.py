"""Allow ``python -m pgraph``."""

from pgraph.cli import main

if __name__ == "__main__":
    main()
