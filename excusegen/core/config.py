"""
Runtime configuration for the excuse service.
Every setting comes from the environment (optionally a .env file).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_PACKAGE_DIR = Path(__file__).resolve().parent.parent

# Database path configuration
DB_PATH = os.getenv("DB_PATH", "./data/excuses.db")

# Device-resident key/value store used by the local (offline) variant
LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", "./data/device.db")

# Static excuse catalog sources, loaded once at startup
CATALOG_DIR = os.getenv("CATALOG_DIR", str(_PACKAGE_DIR / "data" / "excuses"))

DEBUG = os.getenv("DEBUG", "true").lower() == "true"

# Text generation
GENERATOR_PROVIDER = os.getenv("GENERATOR_PROVIDER", "ollama")  # ollama|mock
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.2:latest")
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.9"))

# Favorites and rankings
MAX_FAVORITES = int(os.getenv("MAX_FAVORITES", "10"))
FAVORITES_CAP_ENFORCED = os.getenv("FAVORITES_CAP_ENFORCED", "true").lower() == "true"
TOP_RATED_DEFAULT_LIMIT = int(os.getenv("TOP_RATED_DEFAULT_LIMIT", "10"))
TOP_RATED_MAX_LIMIT = int(os.getenv("TOP_RATED_MAX_LIMIT", "100"))

# Expo dev server, Expo web and a local web UI
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:8081,http://localhost:19006,http://localhost:3000",
    ).split(",")
    if origin.strip()
]

VERSION = "1.0.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def ensure_db_directory(path: str = None):
    """Ensure the directory holding a SQLite file exists."""
    Path(path or DB_PATH).parent.mkdir(parents=True, exist_ok=True)


def get_excuse_agent():
    """Get the configured text-generation agent."""
    if GENERATOR_PROVIDER == "mock":
        from ..agents.mock_agent import MockExcuseAgent
        return MockExcuseAgent("excuse_mock")

    from ..agents.ollama_agent import OllamaExcuseAgent
    return OllamaExcuseAgent("excuse_ollama", OLLAMA_MODEL, temperature=GENERATION_TEMPERATURE)


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if GENERATOR_PROVIDER not in ["ollama", "mock"]:
        issues.append(f"Invalid GENERATOR_PROVIDER: {GENERATOR_PROVIDER}")

    if MAX_FAVORITES < 1:
        issues.append("MAX_FAVORITES must be >= 1")

    if TOP_RATED_DEFAULT_LIMIT < 1:
        issues.append("TOP_RATED_DEFAULT_LIMIT must be >= 1")

    if TOP_RATED_MAX_LIMIT < TOP_RATED_DEFAULT_LIMIT:
        issues.append("TOP_RATED_MAX_LIMIT must be >= TOP_RATED_DEFAULT_LIMIT")

    if not 0.0 <= GENERATION_TEMPERATURE <= 2.0:
        issues.append(f"GENERATION_TEMPERATURE out of range: {GENERATION_TEMPERATURE}")

    if not Path(CATALOG_DIR).is_dir():
        issues.append(f"CATALOG_DIR does not exist: {CATALOG_DIR}")

    return issues
