"""Connection settings loaded from constructor values or the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ...core.rows import FetchStyle, normalize_fetch_style
from .dsn import DSN, SqliteMemory, parse_dsn

ENV_PREFIX = "MINI_DBAL_"


@dataclass(frozen=True)
class Settings:
    """Everything needed to open a `DB`.

    Environment variables read by `from_env` (with the default prefix):

    - ``MINI_DBAL_DSN``: canonical DSN string, in-memory SQLite when unset.
    - ``MINI_DBAL_USERNAME`` / ``MINI_DBAL_PASSWORD``: credentials.
    - ``MINI_DBAL_FETCH_STYLE``: fetch style name (``assoc``, ``obj``, ...).
    """

    dsn: DSN = field(default_factory=SqliteMemory)
    username: str = ""
    password: str = ""
    fetch_style: FetchStyle = FetchStyle.OBJ
    options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        prefix: str = ENV_PREFIX,
    ) -> Settings:
        env = os.environ if environ is None else environ

        raw_dsn = env.get(f"{prefix}DSN", "").strip()
        dsn = parse_dsn(raw_dsn) if raw_dsn else SqliteMemory()

        raw_style = env.get(f"{prefix}FETCH_STYLE", "").strip()
        style = normalize_fetch_style(raw_style) if raw_style else FetchStyle.OBJ

        return cls(
            dsn=dsn,
            username=env.get(f"{prefix}USERNAME", ""),
            password=env.get(f"{prefix}PASSWORD", ""),
            fetch_style=style,
        )
