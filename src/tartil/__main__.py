"""Main entry point for the tartil package."""

from tartil.cli import main


if __name__ == "__main__":
    main()
