"""Terminal multi-timer and alarm clock."""

from pathlib import Path

# Base paths
PACKAGE_DIR = Path(__file__).parent
PROJECT_DIR = PACKAGE_DIR.parent
SOUNDS_DIR = PACKAGE_DIR / "sounds"
