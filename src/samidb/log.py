# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for the SamiDB client."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("SAMIDB_LOG_LEVEL", "WARNING").upper()


def resolve_log_level(level: str | None = None) -> int:
    """Map a level name to its numeric value, falling back to WARNING."""
    value = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), None)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI use; the library itself never adds handlers."""
    effective_level = resolve_log_level(level)
    logging.basicConfig(level=effective_level, format="%(levelname)s %(name)s: %(message)s")
    # httpx emits one INFO record per request; keep those for DEBUG runs only.
    if effective_level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["resolve_log_level", "setup_logging"]
