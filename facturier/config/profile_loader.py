"""Layout profile loader: page geometry and typography for generated documents."""

import yaml
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Tuple


@dataclass
class LayoutProfile:
    """Page geometry, column placement and font metrics (millimetres / points).

    Line heights are per font size: a wrapped field of N lines occupies
    N × line height, whatever its content.
    """
    name: str = "default"
    description: str = ""

    # Page (A4)
    page_width: float = 210.0
    page_height: float = 297.0
    margin_left: float = 14.0
    margin_right: float = 14.0
    margin_top: float = 15.0
    margin_bottom: float = 15.0

    # Header band
    company_column_width: float = 95.0
    client_column_x: float = 120.0
    client_column_width: float = 76.0
    separator_min_y: float = 50.0
    header_gap: float = 4.0
    counterparty_padding: float = 7.0

    # Items table
    table_min_top: float = 90.0
    table_margin: float = 12.0
    table_font_size: float = 10.0
    table_line_height: float = 5.0
    table_cell_padding: float = 2.0
    table_header_height: float = 8.0
    unit_column_width: float = 14.0
    quantity_column_width: float = 14.0
    price_column_width: float = 35.0
    total_column_width: float = 35.0

    # Totals and amount in words, relative to the table bottom
    totals_offset: float = 13.0
    totals_panel_x: float = 130.0
    totals_label_x: float = 160.0
    totals_row_height: float = 6.0
    words_offset_with_tax: float = 44.0
    words_offset_without_tax: float = 34.0
    notes_gap: float = 8.0

    # Typography: (font size pt, line height mm)
    title_font: Tuple[float, float] = (22.0, 10.0)
    company_name_font: Tuple[float, float] = (16.0, 7.0)
    client_name_font: Tuple[float, float] = (12.0, 6.0)
    number_font: Tuple[float, float] = (11.0, 6.0)
    body_font: Tuple[float, float] = (10.0, 5.0)
    total_font: Tuple[float, float] = (12.0, 6.0)
    words_font: Tuple[float, float] = (10.0, 6.0)
    notes_font: Tuple[float, float] = (9.0, 4.5)
    baseline_ratio: float = 0.75

    accent_color: Tuple[int, int, int] = (41, 128, 185)
    decimal_separator: str = "."
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def content_left(self) -> float:
        return self.margin_left

    @property
    def content_right(self) -> float:
        return self.page_width - self.margin_right

    @property
    def content_width(self) -> float:
        return self.content_right - self.content_left

    @property
    def content_bottom(self) -> float:
        return self.page_height - self.margin_bottom

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LayoutProfile':
        """Create LayoutProfile from dictionary; unknown keys go to ``extra``."""
        defaults = cls()
        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        known = {f.name for f in fields(cls)}

        for key, value in (data or {}).items():
            if key == "extra":
                extra.update(value or {})
                continue
            if key not in known:
                extra[key] = value
                continue
            current = getattr(defaults, key)
            try:
                if isinstance(current, tuple):
                    if len(value) != len(current):
                        raise ValueError(f"expected {len(current)} values")
                    values[key] = tuple(type(c)(v) for c, v in zip(current, value))
                elif isinstance(current, float):
                    values[key] = float(value)
                else:
                    values[key] = type(current)(value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid value for {key!r}: {value!r} ({e})") from e

        return cls(**values, extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (tuples as lists, YAML friendly)."""
        data = asdict(self)
        return {k: list(v) if isinstance(v, tuple) else v for k, v in data.items()}


def get_profiles_dir() -> Path:
    """Get directory containing profile YAML files.

    Returns:
        Path to profiles directory
    """
    # facturier/config/profile_loader.py -> facturier/config -> facturier -> root
    project_root = Path(__file__).resolve().parent.parent.parent
    return project_root / "configs" / "profiles"


def load_profile(profile_name: str = "default") -> LayoutProfile:
    """Load a layout profile.

    Args:
        profile_name: Name of profile to load (without .yaml extension)

    Returns:
        LayoutProfile object

    Raises:
        FileNotFoundError: If profile file doesn't exist
        ValueError: If profile file is invalid
    """
    profile_path = get_profiles_dir() / f"{profile_name}.yaml"

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_name} (expected at {profile_path})")

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in profile {profile_name}: {e}") from e

    if not data:
        raise ValueError(f"Profile file is empty: {profile_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Profile {profile_name} must be a mapping, got {type(data).__name__}")

    data.setdefault("name", profile_name)
    return LayoutProfile.from_dict(data)


def list_available_profiles() -> List[str]:
    """List all available profile names.

    Returns:
        List of profile names (without .yaml extension)
    """
    profiles_dir = get_profiles_dir()

    if not profiles_dir.exists():
        return ["default"]

    profiles = [profile_file.stem for profile_file in profiles_dir.glob("*.yaml")]
    return sorted(profiles) if profiles else ["default"]


def get_default_profile() -> LayoutProfile:
    """Get default profile (always available).

    Returns:
        Default LayoutProfile
    """
    try:
        return load_profile("default")
    except FileNotFoundError:
        return LayoutProfile(name="default", description="Built-in A4 layout")
