"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tradescope.errors import ConfigError


__all__ = ["EngineConfig", "default_config"]


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EngineConfig:
    """
    Tunables shared by the indicator engine, the backtester and streaming owners.

    Attributes:
        max_bars: Maximum bars a setup may stay open in the backtester before
            the sample is dropped.
        initial_account: Starting balance of the simulated account curve.
        reseed_interval: Finite-window rolling indicators are recomputed from
            scratch at every absolute candle position divisible by this value.
        max_length: Default number of candles a streaming series retains.
        log_level: Root log level used by ``configure_logging``.
    """

    max_bars: int = 100
    initial_account: float = 100_000.0
    reseed_interval: int = 256
    max_length: int = 800
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.max_bars < 1:
            raise ConfigError("max_bars must be >= 1")
        if self.initial_account <= 0:
            raise ConfigError("initial_account must be > 0")
        if self.reseed_interval < 1:
            raise ConfigError("reseed_interval must be >= 1")
        if self.max_length < 1:
            raise ConfigError("max_length must be >= 1")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> EngineConfig:
        """Validate and construct from a raw config dict.

        Missing keys fall back to defaults. Raises ``ConfigError`` with a clear
        message on bad values instead of letting ``TypeError`` or
        ``ValueError`` propagate.
        """
        unknown = set(raw) - {"max_bars", "initial_account", "reseed_interval", "max_length", "log_level"}
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        defaults = cls()
        try:
            max_bars = int(raw.get("max_bars", defaults.max_bars))
        except (TypeError, ValueError) as exc:
            raise ConfigError("max_bars is not an integer") from exc
        try:
            initial_account = float(raw.get("initial_account", defaults.initial_account))
        except (TypeError, ValueError) as exc:
            raise ConfigError("initial_account is not numeric") from exc
        try:
            reseed_interval = int(raw.get("reseed_interval", defaults.reseed_interval))
        except (TypeError, ValueError) as exc:
            raise ConfigError("reseed_interval is not an integer") from exc
        try:
            max_length = int(raw.get("max_length", defaults.max_length))
        except (TypeError, ValueError) as exc:
            raise ConfigError("max_length is not an integer") from exc

        log_level = str(raw.get("log_level", defaults.log_level)).upper()

        return cls(
            max_bars=max_bars,
            initial_account=initial_account,
            reseed_interval=reseed_interval,
            max_length=max_length,
            log_level=log_level,
        )


_default: EngineConfig | None = None


def default_config() -> EngineConfig:
    """Return the shared default configuration."""
    global _default
    if _default is None:
        _default = EngineConfig()
    return _default
