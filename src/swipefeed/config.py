"""
Config loader for SwipeFeed.
Loads YAML configuration with dataclass validation.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


API_BASE_URL_ENV = "SWIPEFEED_API_BASE_URL"


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass
class GestureConfig:
    drag_start_threshold: float = 5.0   # px in either axis before a touch counts as a drag
    like_threshold: float = 120.0       # |x| past this commits like/dislike
    details_threshold: float = 100.0    # -y past this opens the detail view

    # Velocity smoothing (One Euro filter)
    velocity_min_cutoff: float = 1.0
    velocity_beta: float = 0.05
    velocity_d_cutoff: float = 1.0


@dataclass
class AnimationConfig:
    screen_width: float = 390.0
    exit_duration_ms: int = 300
    next_card_scale: float = 0.9
    details_peek_offset: float = -60.0

    # Spring-damper used for cancel, undo re-entry and detail peek
    spring_stiffness: float = 170.0
    spring_damping: float = 26.0
    spring_mass: float = 1.0
    spring_rest_distance: float = 0.5   # px
    spring_rest_speed: float = 5.0      # px/s
    spring_max_ms: int = 1000
    frame_interval_ms: int = 16


@dataclass
class UndoConfig:
    window_ms: int = 3000


@dataclass
class HistoryConfig:
    max_records: int = 200


@dataclass
class PriceTierConfig:
    low_max: float = 50.0
    mid_max: float = 150.0


@dataclass
class RankingConfig:
    learning_rate: float = 1.0
    state_path: Optional[str] = None


@dataclass
class BackendConfig:
    base_url: str = "http://localhost:5000"
    timeout: float = 5.0
    token: Optional[str] = None
    guest_id: Optional[str] = None
    enabled: bool = True


@dataclass
class Config:
    gestures: GestureConfig = field(default_factory=GestureConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    undo: UndoConfig = field(default_factory=UndoConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    price_tiers: PriceTierConfig = field(default_factory=PriceTierConfig)
    ranking: RankingConfig = field(default_factory=RankingConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def validate_config(config: Config) -> Config:
    """Reject values that would break the feed state machine."""
    g = config.gestures
    if g.drag_start_threshold < 0:
        raise ConfigError("gestures.drag_start_threshold must be >= 0")
    if g.like_threshold <= 0 or g.details_threshold <= 0:
        raise ConfigError("gesture decision thresholds must be positive")

    a = config.animation
    if a.screen_width <= 0:
        raise ConfigError("animation.screen_width must be positive")
    if a.exit_duration_ms <= 0 or a.spring_max_ms <= 0 or a.frame_interval_ms <= 0:
        raise ConfigError("animation durations must be positive")
    if a.spring_mass <= 0:
        raise ConfigError("animation.spring_mass must be positive")

    if config.undo.window_ms <= 0:
        raise ConfigError("undo.window_ms must be positive")
    if config.history.max_records <= 0:
        raise ConfigError("history.max_records must be positive")
    if config.price_tiers.low_max >= config.price_tiers.mid_max:
        raise ConfigError("price_tiers.low_max must be below price_tiers.mid_max")
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ConfigError: If a value is out of range.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    data = {}
    if config_path.exists():
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

    config = Config(
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        animation=_dict_to_dataclass(AnimationConfig, data.get('animation')),
        undo=_dict_to_dataclass(UndoConfig, data.get('undo')),
        history=_dict_to_dataclass(HistoryConfig, data.get('history')),
        price_tiers=_dict_to_dataclass(PriceTierConfig, data.get('price_tiers')),
        ranking=_dict_to_dataclass(RankingConfig, data.get('ranking')),
        backend=_dict_to_dataclass(BackendConfig, data.get('backend')),
    )

    env_url = os.environ.get(API_BASE_URL_ENV)
    if env_url:
        config.backend.base_url = env_url

    return validate_config(config)
