"""Runtime settings sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_SNAPSHOT_PATH = Path.home() / ".poke_team" / "snapshot.json"

_TRUTHY = {"1", "true", "yes", "on"}


def _int_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


@dataclass
class Settings:
    """Configuration shared by the CLI, the web API and the MCP server."""

    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    cache_ttl: int = 600
    http_timeout: int = 10
    user_agent: str = "poke-team/0.1 (+https://github.com/)"
    snapshot_path: Path = DEFAULT_SNAPSHOT_PATH
    max_recommendations: int = 10
    offline_types: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        if env is None:
            # Load default .env first, then overlay .env.local so user-specific keys win.
            load_dotenv()
            load_dotenv(".env.local", override=True)
            env = os.environ
        defaults = cls()
        return cls(
            pokeapi_base_url=env.get("POKEAPI_BASE_URL") or defaults.pokeapi_base_url,
            cache_ttl=_int_setting(env, "POKE_TEAM_CACHE_TTL", defaults.cache_ttl),
            http_timeout=_int_setting(env, "POKE_TEAM_HTTP_TIMEOUT", defaults.http_timeout),
            user_agent=env.get("POKE_TEAM_USER_AGENT") or defaults.user_agent,
            snapshot_path=Path(env["POKE_TEAM_SNAPSHOT_PATH"]).expanduser()
            if env.get("POKE_TEAM_SNAPSHOT_PATH")
            else defaults.snapshot_path,
            max_recommendations=_int_setting(
                env, "POKE_TEAM_MAX_RECOMMENDATIONS", defaults.max_recommendations
            ),
            offline_types=(env.get("POKE_TEAM_OFFLINE_TYPES") or "").strip().lower() in _TRUTHY,
        )
