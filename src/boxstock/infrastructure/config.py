"""Runtime settings, read from the environment.

  export BOXSTOCK_DATA_DIR=/srv/boxstock
  export BOXSTOCK_DATABASE_URL=postgresql+psycopg://...
  export BOXSTOCK_ACTOR=<actor id>
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _bool(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable."""
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    database_url: str | None = None
    actor_id: str | None = None
    log_level: str = "WARNING"
    log_json: bool = False
    sql_echo: bool = False

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / 'boxstock.db'}"

    @property
    def actors_file(self) -> Path:
        return self.data_dir / "actors.json"

    def with_overrides(self, **changes) -> Settings:
        """Copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @staticmethod
    def from_env() -> Settings:
        data_dir = os.getenv("BOXSTOCK_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            database_url=os.getenv("BOXSTOCK_DATABASE_URL") or None,
            actor_id=os.getenv("BOXSTOCK_ACTOR") or None,
            log_level=os.getenv("BOXSTOCK_LOG_LEVEL", "WARNING").upper(),
            log_json=_bool("BOXSTOCK_LOG_JSON"),
            sql_echo=_bool("BOXSTOCK_SQL_ECHO"),
        )
