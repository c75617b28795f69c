"""
Configuration - the knobs of the spiral engine.

Every variant of the animation (side count, anchor ratio, hue policy,
rotating or static base) is one engine parameterized by AnimationConfig.
The common variants are available as PRESETS.

Config files may be YAML (.yaml/.yml) or JSON. A file that fails to parse
or validate is reported and replaced by defaults.
"""

import json
import logging
import math
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .colors import COLOR_SPACES
from .geometry import DEFAULT_EPSILON, DEFAULT_MAX_ITERATIONS
from .hues import HueMode

logger = logging.getLogger(__name__)

DRAW_STYLES = ("edges", "filled")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class AnimationConfig:
    """
    Geometry, color and pacing of one animation.

    Lengths are in logical units: the base_width x base_height area that the
    driver letterboxes into whatever surface size it is given.
    """

    # Geometry
    sides: int = 3
    anchor_ratio: float = 0.01      # How far along each edge the next polygon starts
    continue_epsilon: float = DEFAULT_EPSILON  # Stop once the last edge is this short (per axis)
    max_iterations: int = DEFAULT_MAX_ITERATIONS  # Hard ceiling per generation
    base_width: float = 1920.0
    base_height: float = 1080.0
    initial_angle_degrees: float = 0.0

    # Color
    hue_mode: str = HueMode.GENERATION_SYNCED.value
    color_space: str = "hsv"
    saturation: float = 1.0
    level: float = 1.0               # Value (HSV) or lightness (HSL)
    initial_hue: Optional[float] = None  # None = random at startup
    hue_shift_scale: float = 1.0     # Multiplier on the per-edge hue offset; negative reverses
    negate_side_shift: Optional[bool] = None  # None = hue mode default
    generation_hue_shift: float = -1.0 / 360.0  # Base hue drift per generation (per side under static)

    # Motion
    policy: str = "rotational"
    angle_step_degrees: float = 1.0
    persist_orientation: bool = False  # Keep the current angle across resizes

    # Drawing
    draw_style: str = "edges"
    line_width: int = 1
    shapes_per_tick: Optional[int] = None  # None = whole generation per tick
    run_continuously: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnimationConfig":
        """Create from dictionary. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def validate(self) -> Tuple[bool, Optional[str]]:
        """Validate values are sensible."""
        if not _is_int(self.sides) or self.sides < 3:
            return False, f"sides must be an integer >= 3, got {self.sides!r}"

        if not (0.0 < self.anchor_ratio < 1.0):
            return False, f"anchor_ratio must be in (0, 1), got {self.anchor_ratio}"

        if self.continue_epsilon <= 0:
            return False, "continue_epsilon must be positive"

        if not _is_int(self.max_iterations) or self.max_iterations < 1:
            return False, f"max_iterations must be an integer >= 1, got {self.max_iterations}"

        if self.base_width <= 0 or self.base_height <= 0:
            return False, "base_width and base_height must be positive"

        if self.hue_mode not in [m.value for m in HueMode]:
            return False, f"hue_mode must be one of {[m.value for m in HueMode]}"

        if self.color_space not in COLOR_SPACES:
            return False, f"color_space must be one of {list(COLOR_SPACES)}"

        if not (0 <= self.saturation <= 1) or not (0 <= self.level <= 1):
            return False, "saturation and level must be 0-1"

        if self.initial_hue is not None and not math.isfinite(self.initial_hue):
            return False, "initial_hue must be finite"

        if self.draw_style not in DRAW_STYLES:
            return False, f"draw_style must be one of {list(DRAW_STYLES)}"

        if not _is_int(self.line_width) or self.line_width < 1:
            return False, f"line_width must be an integer >= 1, got {self.line_width}"

        if self.shapes_per_tick is not None and (not _is_int(self.shapes_per_tick) or self.shapes_per_tick < 1):
            return False, "shapes_per_tick must be an integer >= 1 (or None for whole generations)"

        return True, None


@dataclass
class DisplayConfig:
    """Host window and pacing configuration."""
    fps: float = 60.0             # Logical tick rate
    native_hz: float = 60.0       # Host repaint cadence
    window_margin: int = 10       # Pixels kept free around the letterboxed area
    background: Tuple[int, int, int] = (0, 0, 0)
    backend: str = "pil"
    title: str = "polyspiral"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DisplayConfig":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if "background" in values:
            values["background"] = tuple(values["background"])
        return cls(**values)

    def validate(self) -> Tuple[bool, Optional[str]]:
        if self.fps <= 0 or self.native_hz <= 0:
            return False, "fps and native_hz must be positive"

        if self.window_margin < 0:
            return False, "window_margin must be >= 0"

        if len(self.background) != 3 or not all(0 <= c <= 255 for c in self.background):
            return False, "background must be an RGB triple in 0-255"

        return True, None


@dataclass
class PolyspiralConfig:
    """Complete configuration for polyspiral."""
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        display = asdict(self.display)
        display["background"] = list(self.display.background)
        return {
            "animation": self.animation.to_dict(),
            "display": display,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PolyspiralConfig":
        """Create from dictionary."""
        data = data or {}
        return cls(
            animation=AnimationConfig.from_dict(data.get("animation", {})),
            display=DisplayConfig.from_dict(data.get("display", {})),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    def validate(self) -> Tuple[bool, Optional[str]]:
        """Validate entire configuration."""
        valid, error = self.animation.validate()
        if not valid:
            return False, f"Animation: {error}"

        valid, error = self.display.validate()
        if not valid:
            return False, f"Display: {error}"

        if self.log_level not in LOG_LEVELS:
            return False, f"log_level must be one of {list(LOG_LEVELS)}"

        return True, None


# Named variants, as overrides of AnimationConfig
PRESETS: Dict[str, Dict[str, Any]] = {
    "rotational": {
        "policy": "rotational",
        "hue_mode": HueMode.GENERATION_SYNCED.value,
        "generation_hue_shift": -1.0 / 360.0,
        "angle_step_degrees": 1.0,
    },
    "static": {
        "policy": "static",
        "hue_mode": HueMode.FIXED_PER_EDGE.value,
        "generation_hue_shift": -1.0 / 60.0,
    },
}


def apply_preset(config: AnimationConfig, name: str) -> AnimationConfig:
    """Return a copy of config with a preset's overrides applied."""
    if name not in PRESETS:
        raise ValueError(f"unknown preset {name!r}; choose from {sorted(PRESETS)}")
    return replace(config, **PRESETS[name])


class ConfigManager:
    """Manages configuration loading and saving."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to config file (default: polyspiral.yaml in current dir)
        """
        if config_path is None:
            config_path = Path("polyspiral.yaml")
        self.config_path = Path(config_path)
        self._config: Optional[PolyspiralConfig] = None

    def _is_yaml(self) -> bool:
        return self.config_path.suffix in (".yaml", ".yml")

    def load(self, force_reload: bool = False) -> PolyspiralConfig:
        """Load configuration from file or return defaults."""
        if self._config is not None and not force_reload:
            return self._config

        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    data = yaml.safe_load(f) if self._is_yaml() else json.load(f)

                self._config = PolyspiralConfig.from_dict(data)

                valid, error = self._config.validate()
                if not valid:
                    logger.warning("Invalid config %s, using defaults: %s", self.config_path, error)
                    self._config = PolyspiralConfig()
            except (OSError, ValueError, TypeError, AttributeError, yaml.YAMLError) as e:
                logger.warning("Error loading config %s, using defaults: %s", self.config_path, e)
                self._config = PolyspiralConfig()
        else:
            self._config = PolyspiralConfig()

        return self._config

    def reload(self) -> PolyspiralConfig:
        """Force reload configuration from file."""
        self._config = None
        return self.load()

    def save(self, config: Optional[PolyspiralConfig] = None) -> bool:
        """
        Save configuration to file.

        Returns:
            True if saved successfully
        """
        if config is None:
            config = self._config or self.load()

        valid, error = config.validate()
        if not valid:
            logger.error("Cannot save invalid config: %s", error)
            return False

        try:
            data = config.to_dict()
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                if self._is_yaml():
                    yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
                else:
                    json.dump(data, f, indent=2)
            self._config = config
            return True
        except OSError as e:
            logger.error("Error saving config %s: %s", self.config_path, e)
            return False


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_path: Optional[Path] = None) -> ConfigManager:
    """Get global config manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(config_path)
    return _config_manager
