# turntable/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Environment-driven settings and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from turntable.core.state_machine import DEFAULT_CATALOG_TIMEOUT
from turntable.runtime.catalog import DEFAULT_CATALOG_PATH

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    catalog_path: Path = DEFAULT_CATALOG_PATH
    catalog_timeout: Optional[float] = DEFAULT_CATALOG_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from ``TURNTABLE_*`` variables, falling back to the
        defaults for anything unset or blank.

        :param environ: Mapping to read instead of ``os.environ``.
        :raises ValueError: If a variable holds an unusable value.
        """
        env = os.environ if environ is None else environ

        catalog_path = env.get("TURNTABLE_CATALOG_PATH") or DEFAULT_CATALOG_PATH

        raw_timeout = env.get("TURNTABLE_CATALOG_TIMEOUT", "").strip()
        catalog_timeout: Optional[float] = DEFAULT_CATALOG_TIMEOUT
        if raw_timeout:
            try:
                catalog_timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"TURNTABLE_CATALOG_TIMEOUT must be a number, got {raw_timeout!r}")
            if catalog_timeout <= 0:
                raise ValueError(f"TURNTABLE_CATALOG_TIMEOUT must be positive, got {raw_timeout!r}")

        log_level = (env.get("TURNTABLE_LOG_LEVEL") or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"TURNTABLE_LOG_LEVEL must be a logging level name, got {log_level!r}")

        return cls(catalog_path=Path(catalog_path), catalog_timeout=catalog_timeout, log_level=log_level)


_handler: Optional[logging.Handler] = None


def configure_logging(level: Union[str, int] = "INFO") -> logging.Handler:
    """
    Install a single stream handler on the root logger. Calling it again only
    adjusts the level.

    :return: The installed handler.
    """
    global _handler
    root = logging.getLogger()
    root.setLevel(level)
    if _handler is None or _handler not in root.handlers:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)
    return _handler
