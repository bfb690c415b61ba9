"""Settings read from the environment.

AUTHKEYS_FILE        file to work on (default: ~/.ssh/authorized_keys)
AUTHKEYS_LOG_LEVEL   logging level name (default: WARNING)
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


def default_keys_path(env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    if env.get("AUTHKEYS_FILE"):
        return Path(env["AUTHKEYS_FILE"])
    home = env.get("HOME")
    base = Path(home) if home else Path.home()
    return base / ".ssh" / "authorized_keys"


@dataclass(frozen=True)
class Settings:
    keys_path: Path
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            keys_path=default_keys_path(env),
            log_level=env.get("AUTHKEYS_LOG_LEVEL", "WARNING").upper(),
        )
