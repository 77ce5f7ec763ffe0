"""
interactive: prompt for connection details, then script tables one at a time,
either displaying the DDL or saving it under scripts/tables/.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from tablescript.cli.console import display_ddl, print_error, print_plain, print_success, print_warning
from tablescript.config import settings
from tablescript.core.catalog_reader import SqlServerCatalogReader
from tablescript.core.db_connector import catalog_connection
from tablescript.core.ddl_generator import DDLGenerator
from tablescript.core.errors import DatabaseConnectionError, MetadataQueryError, NotFoundError, OutputWriteError
from tablescript.core.output_writer import interactive_save_dir, timestamped_filename, write_ddl
from tablescript.models.connection import ConnectionRequest
from tablescript.models.options import GenerationOptions
from tablescript.models.table import TableIdentity

logger = logging.getLogger(__name__)


def prompt_connection() -> ConnectionRequest:
    print_plain("Enter SQL Server connection details:")
    print_plain()
    host = typer.prompt("Server hostname/IP", default=settings.DB_HOST)
    port = typer.prompt("Port", default=settings.DB_PORT, type=int)
    instance = typer.prompt("Instance name (optional, press enter to skip)", default="", show_default=False)
    database = typer.prompt("Database name (required)")
    username = typer.prompt("Username (required)")
    password = typer.prompt("Password (required)", hide_input=True)
    schema = typer.prompt("Schema", default=settings.DB_SCHEMA)
    return ConnectionRequest(
        host=host.strip() or settings.DB_HOST,
        port=port,
        instance_name=instance.strip() or None,
        database=database.strip(),
        username=username.strip(),
        password=password,
        schema_name=schema.strip() or settings.DB_SCHEMA,
    )


def save_ddl(sql: str, table_name: str, root: Path, now: Optional[datetime] = None) -> Path:
    """Save into root/scripts/tables/{table}_{timestamp}.sql, announcing any folder it creates."""
    target = interactive_save_dir(root)
    created = [d for d in (target.parent, target) if not d.exists()]
    path = write_ddl(sql, target, timestamped_filename(table_name, now or datetime.now()))
    for d in created:
        print_success(f"Created {d.name} directory")
    print_success(f"DDL saved to: {path}")
    print_plain(f"  File size: {path.stat().st_size} bytes")
    return path


def script_table(generator: DDLGenerator, identity: TableIdentity, display_only: bool, root: Path,
                 options: GenerationOptions) -> None:
    """One round of the session. Recoverable errors are reported and the session goes on."""
    try:
        ddl = generator.generate(identity, options)
    except NotFoundError as e:
        print_error(str(e))
        return
    except MetadataQueryError as e:
        print_error(f"generating DDL for table '{identity.name}': {e}")
        return

    if display_only:
        display_ddl(ddl.sql, identity.name)
        return
    try:
        save_ddl(ddl.sql, identity.name, root)
    except OutputWriteError as e:
        print_error(f"saving DDL to file: {e}")


def run_interactive(options: GenerationOptions, root: Path = Path(".")) -> None:
    print_plain("=== tablescript - SQL Server DDL Generator ===")
    print_plain("Generate CREATE statements for SQL Server tables")
    print_plain()

    req = prompt_connection()
    if not req.has_connection_info():
        print_error("Database name, username, and password are required.")
        raise typer.Exit(1)
    print_plain()
    print_plain(f"Connecting to: {req.describe()}")
    print_plain(f"Schema: {req.schema_name}")
    print_plain("=" * 51)

    try:
        with catalog_connection(req) as conn:
            print_success("Successfully connected to SQL Server database!")
            generator = DDLGenerator(SqlServerCatalogReader(conn))
            while True:
                print_plain()
                print_plain("=" * 50)
                table_name = ""
                while not table_name:
                    table_name = typer.prompt("Enter table name to script").strip()
                print_plain()
                print_plain("Output options:")
                print_plain("1. Display DDL in console only")
                print_plain("2. Save DDL to file")
                choice = typer.prompt("Choose option (1 or 2)", default="1")
                identity = TableIdentity(schema_name=req.schema_name, name=table_name)
                script_table(generator, identity, choice.strip() != "2", root, options)

                print_plain()
                if not typer.confirm("Script another table?", default=False):
                    break
    except DatabaseConnectionError:
        print_warning("Check your connection details and ensure SQL Server is running.")
        print_warning("SQL Server Authentication must be enabled and TCP/IP configured.")
        raise

    print_plain()
    print_success("tablescript session completed successfully!")
