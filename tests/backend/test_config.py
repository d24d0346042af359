"""Tests for the application configuration endpoints and manager."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.app import app
from writeflow.backend.db.tables import Config as ConfigRow
from writeflow.backend.managers import config as manager
from writeflow.backend.managers.config import CONFIG_ROW_ID, ConfigImportError
from writeflow.backend.models.config import AppConfig
from writeflow.backend.models.enums import ColorScheme


def _without_timestamp(config: dict) -> dict:
    return {k: v for k, v in config.items() if k != "updated_at"}


DEFAULTS = _without_timestamp(AppConfig.default().model_dump(mode="json"))


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------


async def test_get_config_creates_defaults(db_session: AsyncSession) -> None:
    assert await manager.load_config(db_session) is None

    config = await manager.get_config(db_session)
    assert _without_timestamp(config.model_dump(mode="json")) == DEFAULTS

    stored = await manager.load_config(db_session)
    assert stored == config


async def test_unreadable_stored_config_falls_back_to_defaults(db_session: AsyncSession) -> None:
    db_session.add(ConfigRow(id=CONFIG_ROW_ID, config_data="{not json", updated_at=datetime.now(UTC)))
    await db_session.commit()

    assert await manager.load_config(db_session) is None
    config = await manager.get_config(db_session)
    assert _without_timestamp(config.model_dump(mode="json")) == DEFAULTS


async def test_save_config_stamps_updated_at(db_session: AsyncSession) -> None:
    baseline = AppConfig.default()
    edited = baseline.model_copy(deep=True)
    edited.editor.font_size = 18

    saved = await manager.save_config(db_session, edited)
    assert saved.updated_at >= baseline.updated_at
    assert (await manager.load_config(db_session)).editor.font_size == 18


async def test_import_malformed_file_keeps_stored_config(db_session: AsyncSession, tmp_path) -> None:
    edited = AppConfig.default()
    edited.general.language = "en-US"
    await manager.save_config(db_session, edited)

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"general": {"language": "fr-FR"}}), encoding="utf-8")

    with pytest.raises(ConfigImportError):
        await manager.import_config(db_session, bad)
    with pytest.raises(ConfigImportError):
        await manager.import_config(db_session, tmp_path / "missing.json")

    assert (await manager.load_config(db_session)).general.language == "en-US"


async def test_export_then_import(db_session: AsyncSession, tmp_path) -> None:
    edited = AppConfig.default()
    edited.ui.color_scheme = ColorScheme.DARK
    edited.plugins.enabled_plugins = ["wordcount"]
    path = tmp_path / "nested" / "config.json"

    await manager.export_config(edited, path)
    assert json.loads(path.read_text(encoding="utf-8"))["ui"]["color_scheme"] == "Dark"

    imported = await manager.import_config(db_session, path)
    assert imported.model_dump(exclude={"updated_at"}) == edited.model_dump(exclude={"updated_at"})
    assert imported.ui.color_scheme == "Dark"
    assert imported.plugins.enabled_plugins == ["wordcount"]
    assert (await manager.load_config(db_session)).ui.color_scheme == "Dark"


async def test_reset_config(db_session: AsyncSession) -> None:
    edited = AppConfig.default()
    edited.editor.vim_mode = True
    await manager.save_config(db_session, edited)

    reset = await manager.reset_config(db_session)
    assert _without_timestamp(reset.model_dump(mode="json")) == DEFAULTS
    assert (await manager.load_config(db_session)).editor.vim_mode is False


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


async def test_get_config_endpoint(client: AsyncClient) -> None:
    resp = await client.get("/api/config/get")
    assert resp.status_code == 200
    assert _without_timestamp(resp.json()) == DEFAULTS


async def test_save_config_endpoint_updates_app_state(client: AsyncClient) -> None:
    body = (await client.get("/api/config/get")).json()
    body["editor"]["font_size"] = 20

    resp = await client.post("/api/config/save", json=body)
    assert resp.status_code == 200
    assert resp.json()["editor"]["font_size"] == 20
    assert app.state.app_config.editor.font_size == 20
    assert (await client.get("/api/config/get")).json()["editor"]["font_size"] == 20


async def test_get_config_endpoint_serves_app_state(client: AsyncClient, db_session: AsyncSession) -> None:
    active = AppConfig.default()
    active.ui.color_scheme = ColorScheme.DARK
    app.state.app_config = active

    resp = await client.get("/api/config/get")
    assert resp.json()["ui"]["color_scheme"] == "Dark"
    # Served from memory; nothing was written.
    assert await manager.load_config(db_session) is None


async def test_get_config_endpoint_loads_when_state_is_empty(client: AsyncClient, db_session: AsyncSession) -> None:
    app.state.app_config = None

    resp = await client.get("/api/config/get")
    assert resp.status_code == 200
    assert _without_timestamp(resp.json()) == DEFAULTS
    assert app.state.app_config is not None
    assert await manager.load_config(db_session) is not None


async def test_save_config_rejects_incomplete_document(client: AsyncClient) -> None:
    resp = await client.post("/api/config/save", json={"general": DEFAULTS["general"]})
    assert resp.status_code == 422


async def test_import_endpoint_bad_file(client: AsyncClient, tmp_path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[]", encoding="utf-8")

    resp = await client.post("/api/config/import", json={"file_path": str(bad)})
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Failed to import config from")


async def test_export_import_reset_endpoints(client: AsyncClient, tmp_path) -> None:
    config = (await client.get("/api/config/get")).json()
    config["general"]["auto_save_interval"] = 5
    path = tmp_path / "export.json"

    resp = await client.post("/api/config/export", json={"config": config, "file_path": str(path)})
    assert resp.status_code == 204
    assert path.exists()

    resp = await client.post("/api/config/import", json={"file_path": str(path)})
    assert resp.status_code == 200
    assert resp.json()["general"]["auto_save_interval"] == 5
    assert app.state.app_config.general.auto_save_interval == 5

    resp = await client.post("/api/config/reset")
    assert resp.status_code == 200
    assert _without_timestamp(resp.json()) == DEFAULTS
    assert app.state.app_config.general.auto_save_interval == 30


async def test_export_failure_is_operation_failed(client: AsyncClient, tmp_path) -> None:
    blocker = tmp_path / "file.txt"
    blocker.write_text("not a directory", encoding="utf-8")
    config = (await client.get("/api/config/get")).json()

    resp = await client.post(
        "/api/config/export", json={"config": config, "file_path": str(blocker / "config.json")}
    )
    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("Operation failed: ")
