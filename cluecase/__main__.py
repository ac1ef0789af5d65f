"""Entry point for running the ClueCase simulator."""

from .cli import main

if __name__ == "__main__":
    main()
