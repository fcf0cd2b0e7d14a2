import pytest

from swipefeed.config import API_BASE_URL_ENV, Config, ConfigError, load_config, validate_config


@pytest.fixture(autouse=True)
def no_env_override(monkeypatch):
    monkeypatch.delenv(API_BASE_URL_ENV, raising=False)


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "absent.yaml")
    assert config == Config()
    assert config.gestures.like_threshold == 120.0
    assert config.undo.window_ms == 3000


def test_yaml_overrides_and_unknown_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "gestures:\n"
        "  like_threshold: 90\n"
        "  wobble: 3\n"
        "undo:\n"
        "  window_ms: 5000\n"
        "backend:\n"
        "  guest_id: guest-1\n"
        "mystery_section:\n"
        "  a: 1\n"
    )
    config = load_config(path)
    assert config.gestures.like_threshold == 90
    assert config.gestures.details_threshold == 100.0
    assert config.undo.window_ms == 5000
    assert config.backend.guest_id == "guest-1"


def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == Config()


def test_env_overrides_base_url(tmp_path, monkeypatch):
    monkeypatch.setenv(API_BASE_URL_ENV, "http://10.0.0.2:5000")
    config = load_config(tmp_path / "absent.yaml")
    assert config.backend.base_url == "http://10.0.0.2:5000"


def test_project_config_file_loads():
    config = load_config()
    assert config.animation.exit_duration_ms == 300


@pytest.mark.parametrize("section, key, value", [
    ("undo", "window_ms", 0),
    ("animation", "exit_duration_ms", -1),
    ("gestures", "like_threshold", 0),
    ("history", "max_records", 0),
    ("price_tiers", "low_max", 500),
])
def test_invalid_values_raise(section, key, value):
    config = Config()
    setattr(getattr(config, section), key, value)
    with pytest.raises(ConfigError):
        validate_config(config)
