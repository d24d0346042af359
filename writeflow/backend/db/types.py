"""Column types that keep the on-disk encoding of existing data files.

The database predates this backend, so values are stored the way the
desktop app has always written them:

- enum columns hold the JSON-serialized variant name, quotes included
  (``"Active"`` is stored as the 8-character text ``"Active"``);
- tags and metadata are JSON text;
- timestamps are RFC 3339 text in UTC.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from loguru import logger
from sqlalchemy import Text
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetime stored as RFC 3339 text.

    Naive datetimes are assumed to be UTC.  A fixed microsecond precision
    keeps lexical and chronological order in agreement, so ``ORDER BY`` and
    range comparisons work on the raw column.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> str | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).isoformat(timespec="microseconds")

    def process_result_value(self, value: str | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)


class JsonEnum(TypeDecorator[Enum]):
    """Enum stored as its JSON-encoded value, e.g. ``"InProgress"``.

    With a *default*, a stored value that is not valid JSON or names no
    variant reads back as that default instead of failing the whole row.
    """

    impl = Text
    cache_ok = True

    def __init__(self, enum_cls: type[Enum], default: Enum | None = None) -> None:
        super().__init__()
        self.enum_cls = enum_cls
        self.default = default

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        return json.dumps(self.enum_cls(value).value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> Enum | None:
        if value is None:
            return None
        try:
            return self.enum_cls(json.loads(value))
        except ValueError:
            if self.default is None:
                raise
            logger.warning("Unreadable {} value {!r}, using {}", self.enum_cls.__name__, value, self.default)
            return self.default


class JsonBlob(TypeDecorator[Any]):
    """JSON document stored as text; unparseable text reads back as ``None``.

    Model validators turn ``None`` into the field default (empty tags,
    default document metadata).
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        try:
            return json.loads(value)
        except ValueError:
            logger.warning("Unreadable JSON column value {!r}, using defaults", value[:80])
            return None
