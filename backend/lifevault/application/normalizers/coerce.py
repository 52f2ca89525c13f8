"""Lenient coercion helpers shared by every normalizer.

All helpers are pure and total: any decoded JSON value goes in, a value of
the target type comes out. None of them raise.
"""

import copy
import secrets
import time
from datetime import datetime, timezone
from typing import Any

_TRUE_WORDS = frozenset({"true", "yes", "1"})
_FALSE_WORDS = frozenset({"false", "no", "0"})


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def make_id(prefix: str) -> str:
    """Time-ordered id with a random suffix, e.g. ``doc_1718000000000_9f2c4e1ab3d0``."""
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(6)}"


def as_string(value: Any) -> str:
    """Strings pass through; everything else becomes ``""``."""
    return value if isinstance(value, str) else ""


def as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def to_string(value: Any) -> str:
    """Strings pass through, numbers and booleans are stringified, anything else is ``""``."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def to_optional_string(value: Any) -> str | None:
    """Like :func:`to_string` but blank results become None."""
    text = to_string(value)
    return text if text.strip() else None


def trimmed_or_none(value: Any) -> str | None:
    """Trimmed string, or None when blank or not a string."""
    return as_string(value).strip() or None


def to_string_list(value: Any) -> list[str]:
    """Accept an array, or a newline- or comma-separated string."""
    if isinstance(value, list):
        return [text for text in (to_string(v).strip() for v in value) if text]

    raw = to_string(value).strip()
    if not raw:
        return []
    separator = "\n" if "\n" in raw else ","
    return [part.strip() for part in raw.split(separator) if part.strip()]


def to_bool(value: Any, fallback: bool = False) -> bool:
    """``true/yes/1`` → True, ``false/no/0`` → False, anything else → ``fallback``."""
    if isinstance(value, bool):
        return value
    text = to_string(value).strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return fallback


def parse_timestamp(value: Any, default: datetime | None = None) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive values are taken as UTC; a trailing ``Z`` is accepted. Anything
    unparseable yields ``default`` (or now).
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = as_string(value).strip()
        if not text:
            return default or now_utc()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return default or now_utc()

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()


def has_meaningful_value(value: Any) -> bool:
    """True when ``value`` holds any non-blank scalar, at any nesting depth."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (bool, int, float)):
        return True
    if isinstance(value, list):
        return any(has_meaningful_value(item) for item in value)
    if isinstance(value, dict):
        return any(has_meaningful_value(item) for item in value.values())
    return False


def set_by_path(obj: dict[str, Any], path: str, value: Any) -> dict[str, Any]:
    """Write ``value`` at ``a.b.c``, replacing non-dict intermediates."""
    parts = path.split(".")
    cursor = obj
    for part in parts[:-1]:
        nxt = cursor.get(part)
        if not isinstance(nxt, dict):
            nxt = {}
            cursor[part] = nxt
        cursor = nxt
    cursor[parts[-1]] = value
    return obj


def expand_dotted_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Fold form-style ``address.line1`` keys into nested objects.

    Dotted keys are applied after plain keys, so a flat form value overrides
    the nested one it shadows.
    """
    plain = {k: copy.deepcopy(v) for k, v in data.items() if "." not in k}
    for key, value in data.items():
        if "." in key:
            set_by_path(plain, key, copy.deepcopy(value))
    return plain


def flatten_dotted(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Inverse of :func:`expand_dotted_keys` for nested objects (lists are left intact)."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten_dotted(value, path))
        else:
            flat[path] = value
    return flat
