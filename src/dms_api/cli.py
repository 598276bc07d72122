"""`dms-api` command implementations."""

from __future__ import annotations

import typer
import uvicorn
from sqlalchemy.engine import make_url

from dms_api.db.engine import apply_migrations
from dms_api.settings import get_settings

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Document management API CLI (start, migrate).",
)


@app.command()
def start(
    host: str | None = typer.Option(None, "--host", help="Bind address (defaults to DMS_SERVER_HOST)."),
    port: int | None = typer.Option(None, "--port", help="Bind port (defaults to DMS_SERVER_PORT)."),
    reload: bool = typer.Option(False, "--reload", help="Restart on source changes."),
) -> None:
    """Serve the API with uvicorn."""

    settings = get_settings()
    host = host or settings.server_host
    port = port or settings.server_port

    typer.echo(f"Starting DMS API on http://{host}:{port}")
    uvicorn.run(
        "dms_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.logging_level.lower(),
    )


@app.command()
def migrate() -> None:
    """Apply Alembic migrations up to head."""

    settings = get_settings()
    safe_url = make_url(settings.database_dsn).render_as_string(hide_password=True)
    typer.echo(f"Migrating {safe_url}")
    apply_migrations(settings)
    typer.echo("Database is at head.")


__all__ = ["app"]
