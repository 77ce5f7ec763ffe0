"""
tablescript: SQL Server DDL generator.
CLI entry point.
"""
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import click
import typer

from tablescript.cli import run_export_table, run_export_tables, run_interactive
from tablescript.cli.console import print_error
from tablescript.config import settings
from tablescript.core.errors import DDLError
from tablescript.models.connection import ConnectionRequest
from tablescript.models.options import GenerationOptions, parse_table_list

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("tablescript")


def configure_logging(verbose: bool = False) -> None:
    if verbose:
        logger.setLevel(logging.DEBUG)


# ── App ───────────────────────────────────────────────────────────────────────
app = typer.Typer(
    name="tablescript",
    help="Generate CREATE TABLE / INDEX / FOREIGN KEY DDL from a SQL Server catalog.",
    add_completion=False,
)

# Shared Options
ServerOption = Annotated[str, typer.Option("--server", "-s", help="SQL Server hostname or IP")]
PortOption = Annotated[int, typer.Option("--port", "-p", help="SQL Server port")]
DatabaseOption = Annotated[str, typer.Option("--database", "-d", help="Database name")]
UserOption = Annotated[str, typer.Option("--user", "-u", help="Username")]
PasswordOption = Annotated[str, typer.Option("--password", "-w", help="Password")]
SchemaOption = Annotated[str, typer.Option("--schema", help="Schema name")]
OutputDirOption = Annotated[str, typer.Option("--output-dir", "-o", help="Output directory for SQL files")]
ExcludeIndexesOption = Annotated[bool, typer.Option("--exclude-indexes", help="Exclude index definitions")]
ExcludeForeignKeysOption = Annotated[
    bool, typer.Option("--exclude-foreign-keys", help="Exclude foreign key constraints")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output")]


def _options(exclude_indexes: bool, exclude_foreign_keys: bool) -> GenerationOptions:
    return GenerationOptions(include_indexes=not exclude_indexes, include_foreign_keys=not exclude_foreign_keys)


def _request(server: str, port: int, database: str, user: str, password: str, schema: str) -> ConnectionRequest:
    req = ConnectionRequest(
        host=server.strip() or settings.DB_HOST,
        port=port,
        database=database.strip(),
        username=user.strip(),
        password=password,
        schema_name=schema.strip() or settings.DB_SCHEMA,
    )
    if not req.has_connection_info():
        raise typer.BadParameter("Database, user and password must not be blank",
                                 param_hint="--database/--user/--password")
    return req


@app.callback(invoke_without_command=True)
def global_callback(ctx: typer.Context):
    """
    tablescript entry point.
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("export-tables")
def export_tables(
    database: DatabaseOption,
    user: UserOption,
    password: PasswordOption,
    server: ServerOption = settings.DB_HOST,
    port: PortOption = settings.DB_PORT,
    schema: SchemaOption = settings.DB_SCHEMA,
    output_dir: OutputDirOption = settings.OUTPUT_DIR,
    tables: Annotated[Optional[str], typer.Option("--tables", help="Comma-separated subset of tables")] = None,
    exclude_indexes: ExcludeIndexesOption = False,
    exclude_foreign_keys: ExcludeForeignKeysOption = False,
    verbose: VerboseOption = False,
):
    """
    Export all tables from a SQL Server schema, one .sql file per table.
    """
    configure_logging(verbose)
    req = _request(server, port, database, user, password, schema)
    run_export_tables(req, output_dir, _options(exclude_indexes, exclude_foreign_keys),
                      tables=parse_table_list(tables), verbose=verbose)


@app.command("export-table")
def export_table(
    database: DatabaseOption,
    user: UserOption,
    password: PasswordOption,
    table: Annotated[str, typer.Option("--table", "-t", help="Table name")],
    server: ServerOption = settings.DB_HOST,
    port: PortOption = settings.DB_PORT,
    schema: SchemaOption = settings.DB_SCHEMA,
    output_dir: OutputDirOption = settings.OUTPUT_DIR,
    exclude_indexes: ExcludeIndexesOption = False,
    exclude_foreign_keys: ExcludeForeignKeysOption = False,
    verbose: VerboseOption = False,
):
    """
    Export a specific table from a SQL Server database.
    """
    configure_logging(verbose)
    if not table.strip():
        raise typer.BadParameter("Table name is required for export-table", param_hint="--table")
    req = _request(server, port, database, user, password, schema)
    run_export_table(req, table.strip(), output_dir, _options(exclude_indexes, exclude_foreign_keys),
                     verbose=verbose)


@app.command("interactive")
def interactive(
    exclude_indexes: ExcludeIndexesOption = False,
    exclude_foreign_keys: ExcludeForeignKeysOption = False,
    verbose: VerboseOption = False,
):
    """
    Prompt for connection details and script tables one at a time.
    """
    configure_logging(verbose)
    run_interactive(_options(exclude_indexes, exclude_foreign_keys), root=Path("."))


def main() -> None:
    """Console entry point: exit 1 on usage errors or any uncaught failure, 0 otherwise."""
    try:
        rc = app(standalone_mode=False)
    except click.exceptions.Abort:
        print_error("Aborted.")
        sys.exit(1)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except DDLError as e:
        print_error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        print_error(str(e))
        sys.exit(1)
    sys.exit(rc if isinstance(rc, int) else 0)


if __name__ == "__main__":
    main()
