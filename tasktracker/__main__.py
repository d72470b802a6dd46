"""Allow `python -m tasktracker`."""

from .cli.main import main

if __name__ == "__main__":
    main()
