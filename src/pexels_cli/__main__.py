"""Allow ``python -m pexels_cli``."""

from pexels_cli.app import main

if __name__ == "__main__":
    main()
