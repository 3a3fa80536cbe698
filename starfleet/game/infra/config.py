"""Application configuration and env loading."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from starfleet.game.core.fleet import DEFAULT_MAX_ATTEMPTS

logger = logging.getLogger(__name__)

DEFAULT_CPU_DELAY_SECONDS = 0.45


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Immutable gameplay settings sourced from environment."""

    cpu_delay_seconds: float = DEFAULT_CPU_DELAY_SECONDS
    placement_max_attempts: int = DEFAULT_MAX_ATTEMPTS
    seed: int | None = None


def load_settings() -> GameSettings:
    """Load gameplay settings; malformed values fall back to defaults."""
    delay = _float("STARFLEET_CPU_DELAY_SECONDS", DEFAULT_CPU_DELAY_SECONDS)
    attempts = _int("STARFLEET_PLACEMENT_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)
    raw_seed = os.getenv("STARFLEET_SEED", "").strip()
    seed: int | None = None
    if raw_seed:
        try:
            seed = int(raw_seed)
        except ValueError:
            logger.warning("config_invalid name=STARFLEET_SEED value=%r", raw_seed)
    return GameSettings(
        cpu_delay_seconds=max(0.0, delay),
        placement_max_attempts=attempts if attempts > 0 else DEFAULT_MAX_ATTEMPTS,
        seed=seed,
    )


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files with optional local overrides.

    Precedence is left-to-right because later loads may overwrite previous values.
    Default order:
    1) appdata/config/.env.app
    2) appdata/config/.env.app.local
    3) .env.app
    4) .env.app.local
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env.app",
            "appdata/config/.env.app.local",
            ".env.app",
            ".env.app.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("config_invalid name=%s value=%r", name, raw)
        return default


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("config_invalid name=%s value=%r", name, raw)
        return default


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, then the project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate
    project_root = Path(__file__).resolve().parents[3]
    return project_root / path
