"""
Global Configuration and Chart Defaults.

This module centralizes the constants shared by the resolver, the filter and
the renderer, plus the small user-editable settings layer read from
``.hashi-chord/config.yaml`` and the environment.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

# --- Data Source ---
DEFAULT_API_URL = "https://hashi-explorer.xyz/iframe/api/query"
DEFAULT_TIMEOUT_SECONDS = 10.0

CONFIG_DIR = ".hashi-chord"
CONFIG_PATH = Path(CONFIG_DIR) / "config.yaml"

ENV_API_URL = "HASHI_CHORD_API_URL"
ENV_TIMEOUT = "HASHI_CHORD_TIMEOUT"

# --- Time Units (milliseconds) ---
SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS

# Edges older than this never reach any view (6 weeks)
STALENESS_THRESHOLD_MS = 1000 * 60 * 60 * 24 * 7 * 6

# Ribbon fill opacity by age. Upper bounds are inclusive; anything older
# than the last bound gets FALLBACK_OPACITY.
OPACITY_STEPS: List[Tuple[int, float]] = [
    (15 * MINUTE_MS, 0.75),
    (HOUR_MS, 0.65),
    (6 * HOUR_MS, 0.55),
    (DAY_MS, 0.5),
    (3 * DAY_MS, 0.4),
    (WEEK_MS, 0.3),
    (4 * WEEK_MS, 0.2),
]
FALLBACK_OPACITY = 0.1
MISSING_OPACITY = 0.0
HOVER_OPACITY = 1.0

# d3.schemeCategory10
PALETTE: List[str] = [
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
]

# --- Chart Geometry ---
CHART_WIDTH = 1080
CHART_PADDING = 150
RING_GAP = 20  # innerRadius = min(width, height) / 2 - RING_GAP
RING_THICKNESS = 6
LABEL_OFFSET = 15
LABEL_FONT_SIZE = "16px"

# Placeholder SVG used for the empty state and for errors
MESSAGE_WIDTH = 640
MESSAGE_HEIGHT = 480
MESSAGE_FONT_SIZE = "24px"
ERROR_COLOR = "red"

INVALID_DATA_MESSAGE = "Invalid data provided."
FETCH_FAILED_MESSAGE = "Failed to fetch data."


class ChartSettings(BaseModel):
    """User-tunable settings. CLI options take precedence over these."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    output: str = "chord.html"
    width: int = CHART_WIDTH
    padding: int = CHART_PADDING

    @property
    def inner_radius(self) -> float:
        return self.width * 0.5 - RING_GAP

    @property
    def outer_radius(self) -> float:
        return self.inner_radius + RING_THICKNESS


def load_settings(config_path: Optional[Path] = None) -> ChartSettings:
    """
    Build settings from the YAML config file and environment overrides.

    A missing or unreadable config file falls back to the defaults; it is
    never fatal. A value that fails validation is dropped on its own and
    its field keeps the default.

    Args:
        config_path: Location of the YAML file. Defaults to CONFIG_PATH.

    Returns:
        ChartSettings: The merged settings.
    """
    path = config_path or CONFIG_PATH
    data = {}

    if path.exists():
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable config {path}: {e}")
            data = {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {path}: expected a mapping")
            data = {}

    if os.getenv(ENV_API_URL):
        data["api_url"] = os.environ[ENV_API_URL]
    if os.getenv(ENV_TIMEOUT):
        data["timeout"] = os.environ[ENV_TIMEOUT]

    try:
        return ChartSettings(**data)
    except ValidationError as e:
        invalid = {err["loc"][0] for err in e.errors() if err["loc"]}
        logger.warning(f"Ignoring invalid settings {sorted(invalid)}: {e}")

    valid = {key: value for key, value in data.items() if key not in invalid}
    try:
        return ChartSettings(**valid)
    except ValidationError as e:
        logger.warning(f"Invalid settings, using defaults: {e}")
        return ChartSettings()
