import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    # Catalog
    source: str  # directory path or slides server URL
    timeout_s: float

    # Recent-songs table
    recent_limit: int

    # Logging
    log_level: str | None


def load_config() -> AppConfig:
    return AppConfig(
        source=os.getenv("SONGSLIDES_SOURCE", "."),
        timeout_s=float(os.getenv("SONGSLIDES_TIMEOUT", "15")),
        recent_limit=int(os.getenv("SONGSLIDES_RECENT_LIMIT", "25")),
        log_level=os.getenv("SONGSLIDES_LOG_LEVEL") or None,
    )
