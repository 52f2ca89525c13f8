"""Vault logging setup.

Three knobs on top of the root level: SQL traffic (SQLAlchemy, aiosqlite),
store writes (records, documents, profiles, the key-value backend) and
migration notices (schema-version resets, legacy payload and attachment
rewrites, items dropped by normalization).

``open_vault`` calls :func:`setup_logging` with the settings it was given.
Hosts that open stores by hand should call it once themselves.
"""

import logging
import sys

from lifevault.config import Settings, get_settings


# ── Settings field → logger names ───────────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_storage": [
        "lifevault.application.services.record_store",
        "lifevault.application.services.document_store",
        "lifevault.application.services.profile_stores",
        "lifevault.application.services.attachment_linker",
        "lifevault.infrastructure.database",
    ],
    "log_level_migration": [
        "lifevault.application.services.storage_schema_guard",
        "lifevault.application.normalizers",
    ],
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the root and per-category levels from ``settings``."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # A host app that already installed handlers keeps them
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    levels = {field: getattr(settings, field, "INFO") for field in _CATEGORY_MAP}
    for field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(levels[field])
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Vault logging configured (root=%s, %s)",
        settings.log_level,
        ", ".join(f"{field}={value}" for field, value in levels.items()),
    )


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    numeric = logging.getLevelName(raw.upper())
    return numeric if isinstance(numeric, int) else logging.INFO
