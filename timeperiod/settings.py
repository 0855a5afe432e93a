from __future__ import annotations

import functools
import logging
import os
import typing

from dotenv import dotenv_values, find_dotenv

from .units import TimeUnit, parse_unit

logger = logging.getLogger(__name__)

DEFAULT_FORMAT_CACHE_SIZE: typing.Final = 128

_reload_hooks: list[typing.Callable[[], None]] = []


class Settings(typing.NamedTuple):
    default_max_unit: TimeUnit | None = None
    format_cache_size: int = DEFAULT_FORMAT_CACHE_SIZE


def _environment() -> dict[str, str | None]:
    # the process environment wins over .env, which is read but never exported
    return {**dotenv_values(find_dotenv(usecwd=True)), **os.environ}


def load_settings() -> Settings:
    environ = _environment()

    default_max_unit = None
    raw_max_unit = environ.get("TIMEPERIOD_DEFAULT_MAX_UNIT")
    if raw_max_unit:
        try:
            default_max_unit = parse_unit(raw_max_unit)
        except ValueError as e:
            raise ValueError(f"TIMEPERIOD_DEFAULT_MAX_UNIT: {e}") from e

    format_cache_size = DEFAULT_FORMAT_CACHE_SIZE
    raw_cache_size = environ.get("TIMEPERIOD_FORMAT_CACHE_SIZE")
    if raw_cache_size:
        try:
            format_cache_size = int(raw_cache_size)
        except ValueError as e:
            raise ValueError(
                f"TIMEPERIOD_FORMAT_CACHE_SIZE: not an integer: {raw_cache_size!r}"
            ) from e
        if format_cache_size < 0:
            raise ValueError(
                f"TIMEPERIOD_FORMAT_CACHE_SIZE: must not be negative: {format_cache_size}"
            )

    settings = Settings(default_max_unit, format_cache_size)
    logger.debug(f"loaded settings: {settings}")
    return settings


@functools.lru_cache(maxsize=None)
def get_settings() -> Settings:
    return load_settings()


def on_reload(hook: typing.Callable[[], None]) -> typing.Callable[[], None]:
    """Register ``hook`` to run whenever the cached settings are dropped."""
    _reload_hooks.append(hook)
    return hook


def clear_settings() -> None:
    get_settings.cache_clear()
    for hook in _reload_hooks:
        hook()


def reload_settings() -> Settings:
    clear_settings()
    return get_settings()
