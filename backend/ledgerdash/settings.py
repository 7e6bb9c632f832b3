from __future__ import annotations

import datetime as dt
import logging
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    tz_offset_hours: int
    log_level: str

    @property
    def report_tz(self) -> dt.timezone:
        return dt.timezone(dt.timedelta(hours=self.tz_offset_hours))


def _tz_offset_from_env() -> int:
    raw = os.getenv("LEDGERDASH_TZ_OFFSET_HOURS", "").strip()
    if not raw:
        # Asia/Jakarta, no DST
        return 7
    try:
        hours = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"LEDGERDASH_TZ_OFFSET_HOURS must be an integer, got {raw!r}") from exc
    if not -12 <= hours <= 14:
        raise RuntimeError(f"LEDGERDASH_TZ_OFFSET_HOURS out of range: {hours}")
    return hours


def get_settings() -> Settings:
    # 1) env var
    env = os.getenv("LEDGERDASH_DATA_DIR")
    if env and env.strip():
        p = Path(env).expanduser()
    else:
        # 2) default: backend/data
        # ledgerdash/settings.py -> ledgerdash/ -> backend/
        p = Path(__file__).resolve().parents[1] / "data"

    p.mkdir(parents=True, exist_ok=True)
    return Settings(
        data_dir=p,
        tz_offset_hours=_tz_offset_from_env(),
        log_level=(os.getenv("LEDGERDASH_LOG_LEVEL") or "INFO").strip().upper(),
    )


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
