"""Active layout profile shared by the planner and the assembler.

The CLI picks the profile once (``--profile`` or FACTURIER_LAYOUT_PROFILE);
library callers can also pass an already-built LayoutProfile. Every switch
is logged with the geometry that matters when a document looks wrong.
"""

import logging
from typing import Optional, Union

from .profile_loader import LayoutProfile, get_default_profile, load_profile

logger = logging.getLogger(__name__)

_active: Optional[LayoutProfile] = None


def _check_geometry(profile: LayoutProfile) -> None:
    if profile.content_width <= 0:
        raise ValueError(
            f"Profile {profile.name!r} leaves no content width "
            f"(page {profile.page_width} mm, margins {profile.margin_left}/{profile.margin_right})"
        )
    if profile.content_bottom <= profile.margin_top:
        raise ValueError(
            f"Profile {profile.name!r} leaves no content height "
            f"(page {profile.page_height} mm, margins {profile.margin_top}/{profile.margin_bottom})"
        )


def set_profile(profile: Union[str, LayoutProfile] = "default") -> LayoutProfile:
    """Make a profile the active one.

    Args:
        profile: Profile name from configs/profiles, or a LayoutProfile

    Returns:
        The active LayoutProfile

    Raises:
        FileNotFoundError: If a named profile doesn't exist
        ValueError: If the profile is invalid or its margins leave no room
    """
    global _active
    new_profile = load_profile(profile) if isinstance(profile, str) else profile
    _check_geometry(new_profile)

    previous = _active.name if _active is not None else None
    _active = new_profile
    if previous is not None and previous != new_profile.name:
        logger.info("Layout profile switched: %s -> %s", previous, new_profile.name)
    else:
        logger.info("Layout profile: %s", new_profile.name)
    logger.debug(
        "Page %.1fx%.1f mm, content %.1f mm wide, bottom at %.1f mm",
        new_profile.page_width, new_profile.page_height,
        new_profile.content_width, new_profile.content_bottom,
    )
    return _active


def get_profile() -> LayoutProfile:
    """Active profile; the default one is loaded on first use."""
    global _active
    if _active is None:
        _active = get_default_profile()
        logger.debug("Layout profile: %s (default)", _active.name)
    return _active


def reset_profile():
    global _active
    _active = None
