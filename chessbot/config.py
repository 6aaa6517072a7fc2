# chessbot/config.py
from dataclasses import dataclass, fields
import logging
import os
import tomllib

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    default_rating: int = 1000
    chess960: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000

    @staticmethod
    def load_from_toml(path: str = "chessbot.toml") -> "EngineConfig":
        cfg = EngineConfig()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        # accepts either a flat file or an [engine] table
        section = raw.get("engine", raw)
        known = {f.name for f in fields(cfg)}
        for k, v in section.items():
            if k in known:
                setattr(cfg, k, v)
        cfg.log_level = str(cfg.log_level).upper()
        return cfg


def load_config(path=None) -> EngineConfig:
    """Load config from TOML, then apply CHESSBOT_* environment overrides."""
    cfg = EngineConfig.load_from_toml(path or os.environ.get("CHESSBOT_CONFIG_TOML", "chessbot.toml"))

    override_rating = os.environ.get("CHESSBOT_RATING")
    if override_rating:
        try:
            cfg.default_rating = int(override_rating)
        except ValueError:
            logger.warning("Ignoring non-integer CHESSBOT_RATING=%r", override_rating)

    override_level = os.environ.get("CHESSBOT_LOG_LEVEL")
    if override_level:
        cfg.log_level = override_level.upper()
    return cfg
