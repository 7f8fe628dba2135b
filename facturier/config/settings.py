"""Central configuration for Facturier (environment variables + pyproject)."""

import os
import logging
from pathlib import Path

from ..models.currency import CURRENCIES, TND, CurrencyPolicy

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def get_app_name() -> str:
    """Get application name."""
    return "Facturier"


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        with open(PROJECT_ROOT / "pyproject.toml", "rb") as f:
            pyproject = tomli.load(f)
        return pyproject.get("project", {}).get("version", "0.1.0")
    except (OSError, ImportError, ValueError) as e:
        logger.debug(f"Could not read version from pyproject.toml: {e}")
        return "0.1.0"


def get_default_output_dir() -> Path:
    """Get default output directory for generated PDFs and registers.

    FACTURIER_OUTPUT_DIR overrides the default project root / "out".

    Returns:
        Path object to default output directory (created if needed)
    """
    env_dir = os.getenv("FACTURIER_OUTPUT_DIR")
    output_dir = Path(env_dir) if env_dir else PROJECT_ROOT / "out"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def get_default_currency() -> CurrencyPolicy:
    """Get the currency used when neither invoice nor company names one.

    Returns:
        Policy for FACTURIER_DEFAULT_CURRENCY, TND if unset or unsupported
    """
    code = os.getenv("FACTURIER_DEFAULT_CURRENCY", TND.code).strip().upper()
    if code not in CURRENCIES:
        logger.warning(f"Invalid default currency: {code}, using '{TND.code}'")
        return TND
    return CURRENCIES[code]


def get_layout_profile_name() -> str:
    """Get layout profile name (FACTURIER_LAYOUT_PROFILE, default "default")."""
    return os.getenv("FACTURIER_LAYOUT_PROFILE", "default").strip() or "default"


def get_log_level() -> int:
    """Get log level from FACTURIER_LOG_LEVEL (default WARNING)."""
    name = os.getenv("FACTURIER_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        logger.warning(f"Invalid log level: {name}, using 'WARNING'")
        return logging.WARNING
    return level
