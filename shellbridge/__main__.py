"""Allow ``python -m shellbridge``."""

from shellbridge.server import main

if __name__ == "__main__":
    main()
