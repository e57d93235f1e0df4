"""
Environment configuration.

Settings are read from the process environment, with the nearest `.env` file
(searched from the working directory upward) loaded first; existing variables
are not overridden.

Environment variables:
- DATEONLY_LOCAL_TIMEZONE: IANA zone name (e.g. "America/Chicago") used as the
  local zone when resolving "today" and Unix timestamps to a calendar date.
  Optional; when unset the host's local zone is used.
"""

from __future__ import annotations

import os
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import find_dotenv, load_dotenv

# Nearest .env from the working directory upward
load_dotenv(dotenv_path=find_dotenv(usecwd=True))

LOCAL_TIMEZONE_VAR = "DATEONLY_LOCAL_TIMEZONE"


def get_local_zone() -> Optional[tzinfo]:
    """
    Resolve the configured local zone.

    Returns:
        ZoneInfo for DATEONLY_LOCAL_TIMEZONE, or None when the variable is unset
        (callers then fall back to the host's local zone).

    Raises:
        RuntimeError: If the variable names an unknown zone.
    """

    name = os.getenv(LOCAL_TIMEZONE_VAR)
    if not name:
        return None

    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(
            f"Invalid environment variable: {LOCAL_TIMEZONE_VAR}={name!r}. "
            "Set it to an IANA timezone name such as 'America/Chicago'."
        ) from exc


__all__ = ["LOCAL_TIMEZONE_VAR", "get_local_zone"]
