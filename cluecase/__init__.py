"""ClueCase: round engine for a 24-case elimination game with clues and power-ups."""

from pathlib import Path

VERSION = "1.0.0"

# Fluent resources shipped with the package
LOCALES_DIR = Path(__file__).parent / "locales"
