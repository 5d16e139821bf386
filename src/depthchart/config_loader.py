"""Runtime settings read from the environment or a saved JSON profile."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from depthchart.persistence import SnapshotStore, open_storage


logger = logging.getLogger(__name__)

_STORAGE_ENV = "DEPTHCHART_STORAGE"
_DB_PATH_ENV = "DEPTHCHART_DB_PATH"
_DATA_DIR_ENV = "DEPTHCHART_DATA_DIR"
_SEED_ENV = "DEPTHCHART_SEED"
_LEAGUE_ENV = "DEPTHCHART_DEFAULT_LEAGUE"

STORAGE_CHOICES = ("sqlite", "json", "memory")
SEED_CHOICES = ("none", "reference", "sample")

_DEFAULT_STORAGE = "sqlite"
_DEFAULT_SEED = "reference"
_DEFAULT_LEAGUE = "NFL"
_DB_FILENAME = "depthchart.sqlite"


def _env_choice(env: Mapping[str, str], name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value not in choices:
        logger.warning("Invalid value for %s: %s; using default %s", name, raw, default)
        return default
    return value


@dataclass
class Settings:
    storage: str = _DEFAULT_STORAGE
    data_dir: Path = field(default_factory=lambda: Path("data"))
    db_path: Optional[str] = None
    seed: str = _DEFAULT_SEED
    default_league: str = _DEFAULT_LEAGUE

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        data_dir = env.get(_DATA_DIR_ENV)
        league = (env.get(_LEAGUE_ENV) or _DEFAULT_LEAGUE).strip().upper() or _DEFAULT_LEAGUE
        # Boolean spellings of the seed flag.
        seed_raw = env.get(_SEED_ENV)
        if seed_raw is not None and seed_raw.strip().lower() in {"1", "true", "yes"}:
            seed = "sample"
        elif seed_raw is not None and seed_raw.strip().lower() in {"0", "false", "no"}:
            seed = "none"
        else:
            seed = _env_choice(env, _SEED_ENV, _DEFAULT_SEED, SEED_CHOICES)
        return cls(
            storage=_env_choice(env, _STORAGE_ENV, _DEFAULT_STORAGE, STORAGE_CHOICES),
            data_dir=Path(data_dir) if data_dir else Path("data"),
            db_path=env.get(_DB_PATH_ENV) or None,
            seed=seed,
            default_league=league,
        )

    @property
    def resolved_db_path(self) -> str:
        if self.db_path:
            return self.db_path
        return str(self.data_dir / _DB_FILENAME)

    def open_storage(self) -> SnapshotStore:
        db_path: Path | str = self.resolved_db_path
        if isinstance(db_path, str) and not db_path.startswith("file:"):
            db_path = Path(db_path)
        return open_storage(self.storage, db_path=db_path, data_dir=self.data_dir)

    @classmethod
    def load(cls, path: Path) -> "Settings":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            storage=data.get("storage", _DEFAULT_STORAGE),
            data_dir=Path(data.get("data_dir", "data")),
            db_path=data.get("db_path"),
            seed=data.get("seed", _DEFAULT_SEED),
            default_league=data.get("default_league", _DEFAULT_LEAGUE),
        )

    def save(self, path: Path) -> None:
        payload = asdict(self)
        payload["data_dir"] = str(self.data_dir)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
