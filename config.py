import os
from dataclasses import dataclass, field
from typing import List


def _get_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _get_int(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float(key: str, default: float) -> float:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    latency_scale: float = 1.0
    validate: bool = True
    share_host: str = "linkbio.com"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    origins = os.getenv("LINKBIO_CORS_ORIGINS", "*")
    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=_get_int("PORT", 8000),
        latency_scale=max(0.0, _get_float("LINKBIO_LATENCY_SCALE", 1.0)),
        validate=_get_bool("LINKBIO_VALIDATE", True),
        share_host=os.getenv("LINKBIO_SHARE_HOST", "linkbio.com").strip() or "linkbio.com",
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
        log_level=os.getenv("LINKBIO_LOG_LEVEL", "INFO").upper(),
    )
