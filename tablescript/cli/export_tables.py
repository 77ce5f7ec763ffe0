"""export-tables: script every table of a schema into output_dir/{table}.sql."""
import logging
from pathlib import Path
from typing import Optional

from tablescript.cli.console import print_error, print_plain, print_step
from tablescript.core.catalog_reader import SqlServerCatalogReader
from tablescript.core.db_connector import catalog_connection
from tablescript.core.ddl_generator import DDLGenerator
from tablescript.core.exporter import export_schema
from tablescript.models.connection import ConnectionRequest
from tablescript.models.ddl import ExportSummary, TableExportResult
from tablescript.models.options import GenerationOptions

logger = logging.getLogger(__name__)


def run_export_tables(
    req: ConnectionRequest,
    output_dir: str,
    options: GenerationOptions,
    tables: Optional[list[str]] = None,
    verbose: bool = False,
) -> ExportSummary:
    output_path = Path(output_dir)
    if not output_path.exists():
        output_path.mkdir(parents=True)
        if verbose:
            print_step(f"Created output directory: {output_path.resolve()}")

    if verbose:
        print_step("Connecting to SQL Server...")
        print_plain(f"Server: {req.host}:{req.port}")
        print_plain(f"Database: {req.database}")
        print_plain(f"Schema: {req.schema_name}")

    with catalog_connection(req) as conn:
        if verbose:
            print_step("Successfully connected to SQL Server")
        generator = DDLGenerator(SqlServerCatalogReader(conn))

        def announce(selected: list[str]) -> None:
            print_plain(f"Found {len(selected)} tables in schema '{req.schema_name}'")

        def report(result: TableExportResult) -> None:
            if result.status == "error":
                print_plain()
                print_error(f"exporting table '{result.table_name}': {result.error}")
            elif verbose:
                print_plain(f"Exported table: {result.table_name}")
                print_plain(f"  Saved to: {result.file_path}")
            else:
                print_plain(".", end="")

        summary = export_schema(
            generator, req.schema_name, output_path, options,
            tables=tables or None, on_selected=announce, on_result=report,
        )

    if not verbose:
        print_plain()
    print_plain()
    print_plain("Export completed:")
    print_plain(f"  Tables exported: {summary.tables_exported}")
    if summary.errors:
        print_plain(f"  Errors: {summary.errors}")
    print_plain(f"  Output directory: {summary.output_dir}")
    logger.info("Exported %d tables (%d errors) in %.2fs", summary.tables_exported, summary.errors,
                summary.duration_seconds)
    return summary
