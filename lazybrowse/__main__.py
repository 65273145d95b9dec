"""``python -m lazybrowse [PATH]``: browse PATH with commands read from stdin."""

from .cli import main


if __name__ == "__main__":
    main()
