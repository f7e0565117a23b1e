"""
Configuration management with environment variable support.

Only ambient concerns (logging) are configurable here. Rendering never
reads configuration: all rendering defaults live in daystrip.settings
and are passed in explicitly.
Automatically loads .env file if present.
"""

import os
from pathlib import Path
from typing import Literal
from dotenv import load_dotenv

# Load .env file from project root (one level up from daystrip/)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Logging configuration
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = os.getenv("LOG_LEVEL", "INFO").upper()

# Logger name used by every daystrip module
LOGGER_NAME: str = os.getenv("DAYSTRIP_LOGGER_NAME", "daystrip")
