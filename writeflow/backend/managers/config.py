"""Application configuration: load-or-default, save, import, export, reset.

The configuration is one ``AppConfig`` JSON blob in the singleton ``config``
row (``id = 1``).  Every save overwrites it wholesale.

A stored payload that no longer parses (written by an older release, or
corrupted) is treated as "no configuration": callers get fresh defaults and
the bad row is overwritten on the next save.

Import/export files are pretty-printed JSON.  File I/O runs in a worker
thread via ``anyio.to_thread.run_sync``; exports are written atomically.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from datetime import UTC, datetime
from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.db.tables import Config as ConfigRow
from writeflow.backend.models.config import AppConfig

CONFIG_ROW_ID = 1


class ConfigImportError(ValueError):
    """Raised when a configuration file cannot be read or parsed."""


# -- Row access ----------------------------------------------------------------


async def load_config(db: AsyncSession) -> AppConfig | None:
    """Return the stored configuration, or ``None`` if absent or unreadable."""
    row = await db.get(ConfigRow, CONFIG_ROW_ID)
    if row is None:
        logger.info("No config found in database, will create default")
        return None

    try:
        return AppConfig.model_validate_json(row.config_data)
    except ValidationError as exc:
        logger.warning("Failed to parse stored config ({} errors), using defaults", exc.error_count())
        return None


async def store_config(db: AsyncSession, config: AppConfig) -> None:
    """Insert or replace the singleton config row."""
    await db.merge(
        ConfigRow(
            id=CONFIG_ROW_ID,
            config_data=config.model_dump_json(),
            updated_at=config.updated_at,
        )
    )
    await db.commit()


# -- Service operations --------------------------------------------------------


async def get_config(db: AsyncSession) -> AppConfig:
    """Return the stored configuration, creating and persisting defaults if needed."""
    config = await load_config(db)
    if config is None:
        config = AppConfig.default()
        await store_config(db, config)
    return config


async def save_config(db: AsyncSession, config: AppConfig) -> AppConfig:
    """Stamp ``updated_at`` and persist.  Returns the stamped copy."""
    config = config.model_copy(update={"updated_at": datetime.now(UTC)})
    await store_config(db, config)
    logger.info("Configuration saved")
    return config


async def import_config(db: AsyncSession, file_path: str | Path) -> AppConfig:
    """Load a configuration file and make it the active configuration.

    Raises ``ConfigImportError`` if the file cannot be read or is not a
    complete ``AppConfig``; the stored configuration is then unchanged.
    """
    path = Path(file_path)
    try:
        raw = await to_thread.run_sync(partial(_read_file, path))
        config = AppConfig.model_validate_json(raw)
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        msg = f"Failed to import config from {path}: {exc}"
        raise ConfigImportError(msg) from exc

    logger.info("Importing configuration from {}", path)
    return await save_config(db, config)


async def export_config(config: AppConfig, file_path: str | Path) -> None:
    """Write *config* as pretty-printed JSON, creating parent directories."""
    path = Path(file_path)
    data = config.model_dump_json(indent=2)
    await to_thread.run_sync(partial(_atomic_write, path, data))
    logger.info("Configuration exported to {}", path)


async def reset_config(db: AsyncSession) -> AppConfig:
    """Persist and return factory defaults."""
    return await save_config(db, AppConfig.default())


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    The temp file is created in the same directory so ``os.replace`` is
    atomic on POSIX and overwrites an existing file on Windows.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_file(path: Path) -> str:
    """Read file contents.  Raises ``FileNotFoundError`` if missing."""
    return path.read_text(encoding="utf-8")
