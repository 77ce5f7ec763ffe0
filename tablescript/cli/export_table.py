"""export-table: script a single table into output_dir/{table}.sql."""
from pathlib import Path

from tablescript.cli.console import print_plain, print_step
from tablescript.core.catalog_reader import SqlServerCatalogReader
from tablescript.core.db_connector import catalog_connection
from tablescript.core.ddl_generator import DDLGenerator
from tablescript.core.output_writer import batch_filename, write_ddl
from tablescript.models.connection import ConnectionRequest
from tablescript.models.options import GenerationOptions
from tablescript.models.table import TableIdentity


def run_export_table(
    req: ConnectionRequest,
    table_name: str,
    output_dir: str,
    options: GenerationOptions,
    verbose: bool = False,
) -> Path:
    """Raises NotFoundError when the table is absent; nothing is written then."""
    identity = TableIdentity(schema_name=req.schema_name, name=table_name)

    with catalog_connection(req) as conn:
        if verbose:
            print_step("Successfully connected to SQL Server")
        ddl = DDLGenerator(SqlServerCatalogReader(conn)).generate(identity, options)

    path = write_ddl(ddl.sql, output_dir, batch_filename(table_name))
    print_plain("Table exported successfully:")
    print_plain(f"  Table: {identity}")
    print_plain(f"  File: {path}")
    print_plain(f"  Size: {path.stat().st_size} bytes")
    return path
