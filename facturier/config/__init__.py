"""Configuration package."""

from .settings import (
    get_app_name,
    get_app_version,
    get_default_currency,
    get_default_output_dir,
    get_layout_profile_name,
    get_log_level,
)
from .profile_loader import LayoutProfile, get_default_profile, list_available_profiles, load_profile
from .profile_manager import get_profile, reset_profile, set_profile

__all__ = [
    'get_app_name',
    'get_app_version',
    'get_default_currency',
    'get_default_output_dir',
    'get_layout_profile_name',
    'get_log_level',
    'LayoutProfile',
    'get_default_profile',
    'list_available_profiles',
    'load_profile',
    'get_profile',
    'reset_profile',
    'set_profile',
]
