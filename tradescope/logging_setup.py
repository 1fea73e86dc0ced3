import logging
import sys
from typing import Optional

from tradescope.config import EngineConfig, default_config
from tradescope.errors import ConfigError


__all__ = ["LOG_FORMAT", "configure_logging"]


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(
    level: Optional[str] = None,
    force: bool = False,
    config: Optional[EngineConfig] = None,
) -> None:
    """
    Send tradescope logs to stdout.

    Leaves logging alone when the root logger already has handlers, unless
    ``force`` is set. Without ``level`` the config's ``log_level`` is used.

    Example:
        configure_logging()              # INFO, or EngineConfig.log_level
        configure_logging("debug", force=True)
    """
    root = logging.getLogger()
    if root.hasHandlers() and not force:
        return

    name = (level or (config or default_config()).log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ConfigError(f"Unknown log level: {level}")

    if force:
        root.handlers.clear()
    root.setLevel(numeric)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    logging.getLogger(__name__).debug("Logging configured at %s", name)
