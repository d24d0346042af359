import click


@click.group()
def main() -> None:
    """WriteFlow Studio - local writing workspace backend."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from WRITEFLOW_HOST or 127.0.0.1).")
@click.option("--port", default=None, type=int, help="Bind port (default: from WRITEFLOW_PORT or 8765).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the backend server."""
    import uvicorn

    from writeflow.backend.settings import WriteflowSettings

    settings = WriteflowSettings()

    uvicorn.run(
        "writeflow.backend.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _run_with_session(func):
    """Run ``func(db)`` against the configured database and return its result.

    The schema is created first, so every command works on a fresh machine.
    """
    import asyncio

    from writeflow.backend.db.engine import create_engine, create_session_factory, init_schema
    from writeflow.backend.log import setup_logging
    from writeflow.backend.settings import get_settings

    settings = get_settings()
    setup_logging(settings)

    async def _run():
        engine = create_engine(settings.resolve_database_url())
        try:
            await init_schema(engine)
            async with create_session_factory(engine)() as db:
                return await func(db)
        finally:
            await engine.dispose()

    return asyncio.run(_run())


# ---------------------------------------------------------------------------
# Database management
# ---------------------------------------------------------------------------


@main.group()
def db() -> None:
    """Database management commands."""


@db.command()
def init() -> None:
    """Create the database file and any missing tables."""
    from writeflow.backend.settings import get_settings

    async def _noop(_db) -> None:
        return None

    _run_with_session(_noop)
    click.echo(f"Database ready at {get_settings().resolve_database_url()}.")


# ---------------------------------------------------------------------------
# Application configuration
# ---------------------------------------------------------------------------


@main.group()
def config() -> None:
    """Application configuration commands."""


@config.command()
def show() -> None:
    """Print the active configuration as JSON."""
    from writeflow.backend.managers.config import get_config

    cfg = _run_with_session(get_config)
    click.echo(cfg.model_dump_json(indent=2))


@config.command()
@click.argument("file_path", type=click.Path(dir_okay=False))
def export(file_path: str) -> None:
    """Write the active configuration to FILE_PATH."""
    from writeflow.backend.managers.config import export_config, get_config

    async def _export(db) -> None:
        await export_config(await get_config(db), file_path)

    _run_with_session(_export)
    click.echo(f"Configuration exported to {file_path}.")


@config.command(name="import")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
def import_(file_path: str) -> None:
    """Replace the active configuration with the contents of FILE_PATH."""
    from writeflow.backend.managers.config import ConfigImportError, import_config

    async def _import(db) -> None:
        await import_config(db, file_path)

    try:
        _run_with_session(_import)
    except ConfigImportError as exc:
        raise click.ClickException(str(exc)) from None
    click.echo(f"Configuration imported from {file_path}.")


@config.command()
@click.confirmation_option(prompt="Reset the configuration to defaults?")
def reset() -> None:
    """Restore the default configuration."""
    from writeflow.backend.managers.config import reset_config

    _run_with_session(reset_config)
    click.echo("Configuration reset to defaults.")


if __name__ == "__main__":
    main()
