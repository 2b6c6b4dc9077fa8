import logging
import typer
from typing import Optional
from pathlib import Path
from .config import DatabaseConfig
from .connectors.factory import get_connector
from .domain.models import DatabaseSchema
from .exceptions import ConfigurationError, ConnectionError, ExtractionError, OutputError
from .inspector import InspectorFacade
from .log import setup_logger
from .writer import write_schema

app = typer.Typer(help="Multi-database schema extractor (SQL Server, Sybase, MySQL, PostgreSQL, MongoDB)")

def _load_config(config: Optional[Path], **options) -> DatabaseConfig:
    try:
        return DatabaseConfig.load(config, **options)
    except ConfigurationError as e:
        typer.echo(f"Error loading config: {e}", err=True)
        raise typer.Exit(code=1)

@app.command()
def extract(
    dbtype: Optional[str] = typer.Option(None, "--dbtype", help="sqlserver, sybase, mysql, postgres or mongodb"),
    server: Optional[str] = typer.Option(None, "--server", help="Database server (default: localhost)"),
    port: Optional[int] = typer.Option(None, "--port", help="Database port (default depends on --dbtype)"),
    user: Optional[str] = typer.Option(None, "--user", help="Database user"),
    password: Optional[str] = typer.Option(None, "--password", help="Database password (or SCHEMADUMP_PASSWORD)"),
    database: Optional[str] = typer.Option(None, "--database", help="Database name"),
    schema: Optional[str] = typer.Option(None, "--schema", help="Default schema (dbo / public / database name)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file (default: database_schema.json)"),
    sslmode: Optional[str] = typer.Option(None, "--sslmode", help="SSL mode (PostgreSQL only, default: disable)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to YAML configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """
    Extracts the database structure and saves it as JSON.
    Nothing is written unless the whole extraction succeeds.
    """
    setup_logger(logging.DEBUG if verbose else logging.INFO)
    db_config = _load_config(
        config,
        db_type=dbtype, server=server, port=port, user=user, password=password,
        database=database, default_schema=schema, output=output, sslmode=sslmode,
    )

    typer.echo(f"Database type: {db_config.db_type.value}")
    typer.echo(f"Server: {db_config.server}:{db_config.resolved_port}")
    typer.echo(f"Database: {db_config.database}")
    if db_config.db_type.is_relational:
        typer.echo(f"Schema: {db_config.resolved_schema}")
    typer.echo(f"Output file: {db_config.output}")

    try:
        with get_connector(db_config) as connector:
            typer.secho(f"✅ Connected to {db_config.db_type.value}", fg=typer.colors.GREEN)
            result = InspectorFacade(connector).extract(db_config)
    except ConnectionError as e:
        typer.secho(f"❌ Connection failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except ExtractionError as e:
        typer.secho(f"❌ Schema extraction failed: {e}", fg=typer.colors.RED, err=True)
        if verbose:
            raise e
        raise typer.Exit(code=1)

    try:
        write_schema(result, db_config.output)
    except OutputError as e:
        typer.secho(f"❌ Could not save the JSON file: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✅ Schema saved to: {db_config.output}", fg=typer.colors.GREEN)
    if isinstance(result, DatabaseSchema):
        typer.echo(f"📊 Tables processed: {len(result.tables)}")
    else:
        typer.echo(f"📊 Collections processed: {len(result.collections)}")

@app.command()
def check_conn(
    dbtype: Optional[str] = typer.Option(None, "--dbtype", help="sqlserver, sybase, mysql, postgres or mongodb"),
    server: Optional[str] = typer.Option(None, "--server", help="Database server (default: localhost)"),
    port: Optional[int] = typer.Option(None, "--port", help="Database port (default depends on --dbtype)"),
    user: Optional[str] = typer.Option(None, "--user", help="Database user"),
    password: Optional[str] = typer.Option(None, "--password", help="Database password (or SCHEMADUMP_PASSWORD)"),
    database: Optional[str] = typer.Option(None, "--database", help="Database name"),
    sslmode: Optional[str] = typer.Option(None, "--sslmode", help="SSL mode (PostgreSQL only)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to YAML configuration file"),
):
    """
    Connectivity Health Check.
    Connects, pings and reports latency without extracting anything.
    """
    db_config = _load_config(
        config,
        db_type=dbtype, server=server, port=port, user=user, password=password,
        database=database, sslmode=sslmode,
    )
    connector = get_connector(db_config)
    try:
        report = InspectorFacade(connector).run_diagnostics()
    finally:
        connector.close()

    if report.health.status == "success":
        typer.secho(f"✅ {report.health.db_alias}: Connection Successful ({report.health.latency_ms}ms)", fg=typer.colors.GREEN)
    else:
        typer.secho(f"❌ {report.health.db_alias}: Connection Failed. Error: {report.health.error_message}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

if __name__ == "__main__":
    app()
