import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env from the working directory, if any
load_dotenv()

logger = logging.getLogger(__name__)

# Defaults mirror the gossip controller: 127.0.0.1:7080, one scan per minute
DEFAULT_CONTROL_URL = "http://127.0.0.1:7080"
DEFAULT_REQUEST_TIMEOUT = 5.0
DEFAULT_POLL_INTERVAL = 60.0
DEFAULT_HISTORY_SIZE = 20
DEFAULT_LOG_LEVEL = "INFO"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %s", name, raw, default)
        return default
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %s", name, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r: must not be negative, using %s", name, raw, default)
        return default
    return value


@dataclass
class PlatformConfig:
    control_url: str = DEFAULT_CONTROL_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    history_size: int = DEFAULT_HISTORY_SIZE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "PlatformConfig":
        control_url = os.getenv("TOPOLOGY_CONTROL_URL", DEFAULT_CONTROL_URL).strip() or DEFAULT_CONTROL_URL
        return cls(
            control_url=control_url.rstrip("/"),
            request_timeout=_env_float("TOPOLOGY_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            poll_interval=_env_float("TOPOLOGY_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            history_size=_env_int("TOPOLOGY_HISTORY_SIZE", DEFAULT_HISTORY_SIZE),
            log_level=os.getenv("TOPOLOGY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


def configure_logging(level: str = None) -> None:
    level = (level or PlatformConfig.from_env().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
