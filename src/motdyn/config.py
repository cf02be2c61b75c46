"""Layered configuration for motdyn.

A system-wide file is read first and a per-user file may override any field
it sets. A layer that is missing or malformed is treated as not provided.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger("motdyn.config")

SYSTEM_CONFIG_PATH = "/etc/motdyn/config.toml"
USER_CONFIG_PATH = "~/.config/motdyn/config.toml"
DEFAULT_FAREWELL = "Have a nice day!"


class MotdConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ascii_art: str | None = None  # multi-line banner printed first
    farewell: str | None = None

    def farewell_text(self) -> str:
        """Configured farewell, or the default when missing or blank."""
        if self.farewell is not None and self.farewell.strip():
            return self.farewell
        return DEFAULT_FAREWELL


def expand_tilde(path: str, environ: Mapping[str, str] | None = None) -> Path:
    """Replace a leading ``~`` with ``$HOME``; leave the path alone without HOME."""
    if not path.startswith("~"):
        return Path(path)
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if home is None:
        return Path(path)
    return Path(home + path[1:])


def load_config(path: Path) -> MotdConfig | None:
    """Load one configuration layer; ``None`` if absent, unreadable or invalid."""
    if not path.exists():
        return None
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return MotdConfig.model_validate(data)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("cannot read config %s: %s", path, e)
    except tomllib.TOMLDecodeError as e:
        logger.debug("config %s is not valid TOML: %s", path, e)
    except ValidationError as e:
        logger.debug("config %s has invalid values: %s", path, e)
    return None


def merge_config(system: MotdConfig | None, user: MotdConfig | None) -> MotdConfig:
    """Overlay the fields set in the user layer onto the system layer."""
    merged = system.model_copy() if system is not None else MotdConfig()
    if user is not None:
        if user.ascii_art is not None:
            merged.ascii_art = user.ascii_art
        if user.farewell is not None:
            merged.farewell = user.farewell
    return merged


def load_merged_config(
    system_path: str = SYSTEM_CONFIG_PATH,
    user_path: str = USER_CONFIG_PATH,
    environ: Mapping[str, str] | None = None,
) -> MotdConfig:
    system = load_config(expand_tilde(system_path, environ))
    user = load_config(expand_tilde(user_path, environ))
    logger.debug("config layers: system=%s user=%s", system is not None, user is not None)
    return merge_config(system, user)
