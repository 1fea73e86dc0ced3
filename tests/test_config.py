import pytest

from tradescope.config import EngineConfig, default_config
from tradescope.errors import ConfigError


def test_defaults() -> None:
    cfg = EngineConfig()
    assert cfg.max_bars == 100
    assert cfg.initial_account == 100_000.0
    assert cfg.reseed_interval == 256
    assert cfg.max_length == 800
    assert cfg.log_level == "INFO"


def test_default_config_is_shared() -> None:
    assert default_config() is default_config()
    assert default_config() == EngineConfig()


def test_from_raw_empty_uses_defaults() -> None:
    assert EngineConfig.from_raw({}) == EngineConfig()


def test_from_raw_coerces_values() -> None:
    cfg = EngineConfig.from_raw(
        {"max_bars": "50", "initial_account": "2500", "log_level": "debug"}
    )
    assert cfg.max_bars == 50
    assert cfg.initial_account == 2500.0
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize(
    "raw, match",
    [
        ({"max_bars": "many"}, "max_bars"),
        ({"initial_account": None}, "initial_account"),
        ({"reseed_interval": []}, "reseed_interval"),
        ({"max_length": "x"}, "max_length"),
        ({"max_bars": 0}, "max_bars"),
        ({"initial_account": -1}, "initial_account"),
        ({"log_level": "LOUD"}, "log_level"),
        ({"max_bar": 10}, "Unknown config keys"),
    ],
)
def test_from_raw_rejects_bad_values(raw, match) -> None:
    with pytest.raises(ConfigError, match=match):
        EngineConfig.from_raw(raw)


def test_config_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        EngineConfig(reseed_interval=0)


def test_config_is_frozen() -> None:
    cfg = EngineConfig()
    with pytest.raises(AttributeError):
        cfg.max_bars = 5
