"""Window stack configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_CANVAS_FADE_SECONDS = 0.25


@dataclass(frozen=True, slots=True)
class WindowStackConfig:
    """Immutable window stack configuration."""

    canvas_fade_seconds: float = DEFAULT_CANVAS_FADE_SECONDS
    animation_layer: int = 0
    block_interaction_on_start: bool = True
    max_frame_delta_seconds: float = 0.25
    events_trace_enabled: bool = False
    log_level: str = "INFO"
    log_format: str = "text"
    log_file: str | None = None


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("WINDOWSTACK_LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = _text("LOG_LEVEL", default, env=env)
    return value.strip().upper()


def _normalize_log_format(raw: str) -> str:
    value = raw.strip().lower()
    return value if value in {"text", "json"} else "text"


def load_window_stack_config(*, env: Mapping[str, str] | None = None) -> WindowStackConfig:
    """Load immutable window stack configuration from env vars."""
    log_file = _text("WINDOWSTACK_LOG_FILE", "", env=env)
    return WindowStackConfig(
        canvas_fade_seconds=_float(
            "WINDOWSTACK_CANVAS_FADE_SECONDS", DEFAULT_CANVAS_FADE_SECONDS, minimum=0.0, env=env
        ),
        animation_layer=_int("WINDOWSTACK_ANIMATION_LAYER", 0, minimum=0, env=env),
        block_interaction_on_start=_flag("WINDOWSTACK_BLOCK_ON_START", True, env=env),
        max_frame_delta_seconds=_float("WINDOWSTACK_MAX_FRAME_DELTA", 0.25, minimum=0.0, env=env),
        events_trace_enabled=_flag("WINDOWSTACK_EVENTS_TRACE", False, env=env),
        log_level=resolve_log_level_name(env=env),
        log_format=_normalize_log_format(_text("WINDOWSTACK_LOG_FORMAT", "text", env=env)),
        log_file=log_file or None,
    )
