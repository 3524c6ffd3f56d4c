"""
Configuration settings for the site editor.

Loads settings from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "data")))

# Page storage (one <slug>.html file per page)
PAGES_DIR = Path(os.getenv("PAGES_DIR", str(DATA_DIR / "pages")))

# Feedback log
FEEDBACK_FILE = Path(os.getenv("FEEDBACK_FILE", str(DATA_DIR / "feedback" / "feedback_log.json")))

# Language attribute used for newly created pages
SITE_LANG = os.getenv("SITE_LANG", "en")

# Debug mode
DEBUG = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# API settings
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))


def validate_config():
    """Validate the configuration settings."""
    errors = []

    if PAGES_DIR.exists() and not PAGES_DIR.is_dir():
        errors.append(f"Pages path is not a directory: {PAGES_DIR}")

    if FEEDBACK_FILE.exists() and FEEDBACK_FILE.is_dir():
        errors.append(f"Feedback file path is a directory: {FEEDBACK_FILE}")

    if errors:
        for error in errors:
            print(f"Config Error: {error}")
        return False

    return True


if __name__ == "__main__":
    print("Configuration Settings")
    print("=" * 50)
    print(f"PROJECT_ROOT: {PROJECT_ROOT}")
    print(f"DATA_DIR: {DATA_DIR}")
    print(f"PAGES_DIR: {PAGES_DIR}")
    print(f"FEEDBACK_FILE: {FEEDBACK_FILE}")
    print(f"SITE_LANG: {SITE_LANG}")
    print(f"DEBUG: {DEBUG}")
    print(f"LOG_LEVEL: {LOG_LEVEL}")
    print(f"API_HOST: {API_HOST}")
    print(f"API_PORT: {API_PORT}")
    print("=" * 50)
    print(f"Config valid: {validate_config()}")
