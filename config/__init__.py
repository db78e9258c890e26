"""Central configuration for the onboarding and event wizards.

Values are module-level constants resolved from environment variables once at
import time. A ``.env`` file in the working directory is honoured through
``python-dotenv``. Numeric overrides that cannot be parsed emit a
``RuntimeWarning`` and fall back to the documented default instead of
raising.

``WIZARD_YEAR_MIN`` bounds education years from below (the upper bound is
always the current year). ``WIZARD_DOB_MIN_AGE``/``WIZARD_DOB_MAX_AGE`` bound
the accepted age range for the date of birth.
"""

from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


logger = logging.getLogger(__name__)

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
_FALSY_ENV_VALUES: tuple[str, ...] = ("0", "false", "no", "off")


def _is_truthy_flag(value: str | None, *, default: bool = False) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in _TRUTHY_ENV_VALUES:
        return True
    if candidate in _FALSY_ENV_VALUES:
        return False
    return default


def _parse_positive_int_env(env_var: str, default: int) -> int:
    """Return a positive integer from ``env_var`` or ``default``."""

    raw = os.getenv(env_var)
    if raw is None:
        return default
    candidate = raw.strip()
    if not candidate:
        return default
    try:
        parsed = int(float(candidate))
    except ValueError:
        warnings.warn(
            "%s is not a number; ignoring %s" % (candidate, env_var),
            RuntimeWarning,
        )
        return default
    if parsed <= 0:
        warnings.warn(
            "%s must be positive; ignoring %s" % (env_var, candidate),
            RuntimeWarning,
        )
        return default
    return parsed


# ── Personal details ──────────────────────────────────────
NAME_MIN_LENGTH = _parse_positive_int_env("WIZARD_NAME_MIN_LENGTH", 2)
NAME_MAX_LENGTH = _parse_positive_int_env("WIZARD_NAME_MAX_LENGTH", 50)
MOBILE_NUMBER_DIGITS = _parse_positive_int_env("WIZARD_MOBILE_DIGITS", 10)
DEFAULT_COUNTRY_CODE = os.getenv("WIZARD_DEFAULT_COUNTRY_CODE", "+1").strip() or "+1"
DOB_MIN_AGE = _parse_positive_int_env("WIZARD_DOB_MIN_AGE", 13)
DOB_MAX_AGE = _parse_positive_int_env("WIZARD_DOB_MAX_AGE", 120)
ABOUT_ME_MAX_LENGTH = _parse_positive_int_env("WIZARD_ABOUT_ME_MAX_LENGTH", 500)

# ── Education & roles ─────────────────────────────────────
YEAR_MIN = _parse_positive_int_env("WIZARD_YEAR_MIN", 1950)

# ── Events ────────────────────────────────────────────────
# Event names and host names intentionally use different minimums.
EVENT_NAME_MIN_LENGTH = _parse_positive_int_env("WIZARD_EVENT_NAME_MIN_LENGTH", 3)
EVENT_NAME_MAX_LENGTH = _parse_positive_int_env("WIZARD_EVENT_NAME_MAX_LENGTH", 100)
HOST_NAME_MIN_LENGTH = _parse_positive_int_env("WIZARD_HOST_NAME_MIN_LENGTH", 2)
DESCRIPTION_MAX_LENGTH = _parse_positive_int_env("WIZARD_DESCRIPTION_MAX_LENGTH", 500)

# ── Signup password policy ────────────────────────────────
PASSWORD_MIN_LENGTH = _parse_positive_int_env("WIZARD_PASSWORD_MIN_LENGTH", 8)
PASSWORD_REQUIRE_UPPERCASE = _is_truthy_flag(os.getenv("WIZARD_PASSWORD_REQUIRE_UPPERCASE"), default=True)
PASSWORD_REQUIRE_LOWERCASE = _is_truthy_flag(os.getenv("WIZARD_PASSWORD_REQUIRE_LOWERCASE"), default=True)
PASSWORD_REQUIRE_NUMBER = _is_truthy_flag(os.getenv("WIZARD_PASSWORD_REQUIRE_NUMBER"), default=True)
PASSWORD_REQUIRE_SPECIAL_CHAR = _is_truthy_flag(os.getenv("WIZARD_PASSWORD_REQUIRE_SPECIAL_CHAR"), default=True)

# ── Storage & logging ─────────────────────────────────────
PREFERENCES_PATH = Path(os.getenv("WIZARD_PREFERENCES_PATH", ".wizard_preferences.json")).expanduser()
LOG_LEVEL = os.getenv("WIZARD_LOG_LEVEL", "INFO").strip().upper() or "INFO"

if DOB_MIN_AGE > DOB_MAX_AGE:
    logger.warning(
        "WIZARD_DOB_MIN_AGE (%s) exceeds WIZARD_DOB_MAX_AGE (%s); swapping bounds.",
        DOB_MIN_AGE,
        DOB_MAX_AGE,
    )
    DOB_MIN_AGE, DOB_MAX_AGE = DOB_MAX_AGE, DOB_MIN_AGE


__all__ = [
    "ABOUT_ME_MAX_LENGTH",
    "DEFAULT_COUNTRY_CODE",
    "DESCRIPTION_MAX_LENGTH",
    "DOB_MAX_AGE",
    "DOB_MIN_AGE",
    "EVENT_NAME_MAX_LENGTH",
    "EVENT_NAME_MIN_LENGTH",
    "HOST_NAME_MIN_LENGTH",
    "LOG_LEVEL",
    "MOBILE_NUMBER_DIGITS",
    "NAME_MAX_LENGTH",
    "NAME_MIN_LENGTH",
    "PASSWORD_MIN_LENGTH",
    "PASSWORD_REQUIRE_LOWERCASE",
    "PASSWORD_REQUIRE_NUMBER",
    "PASSWORD_REQUIRE_SPECIAL_CHAR",
    "PASSWORD_REQUIRE_UPPERCASE",
    "PREFERENCES_PATH",
    "YEAR_MIN",
]
