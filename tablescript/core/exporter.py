"""
Batch exporter: script every table of a schema to its own .sql file.
Tables run one after another; a failing table is recorded and skipped.
"""
import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

from tablescript.core.ddl_generator import DDLGenerator
from tablescript.core.output_writer import batch_filename, write_ddl
from tablescript.models.ddl import ExportSummary, TableExportResult
from tablescript.models.options import GenerationOptions
from tablescript.models.table import TableIdentity

logger = logging.getLogger(__name__)


def select_tables(available: list[str], requested: Optional[list[str]]) -> list[str]:
    """Keep catalog order; None means every table, matching is case-insensitive."""
    if requested is None:
        return list(available)
    wanted = {t.lower() for t in requested}
    missing = wanted - {t.lower() for t in available}
    if missing:
        logger.warning("Requested tables not in schema: %s", ", ".join(sorted(missing)))
    return [t for t in available if t.lower() in wanted]


def export_schema(
    generator: DDLGenerator,
    schema_name: str,
    output_dir: Union[str, Path],
    options: Optional[GenerationOptions] = None,
    tables: Optional[list[str]] = None,
    on_selected: Optional[Callable[[list[str]], None]] = None,
    on_result: Optional[Callable[[TableExportResult], None]] = None,
) -> ExportSummary:
    """
    Export each table of `schema_name` to output_dir/{table}.sql.

    Listing the schema is not guarded: if that fails there is nothing to
    continue with. The schema is listed once; `on_selected` sees the tables
    about to be exported. Any per-table failure is caught, logged and counted.
    """
    t0 = time.time()
    options = options or GenerationOptions()
    table_names = select_tables(generator.list_tables(schema_name), tables)
    if on_selected:
        on_selected(table_names)
    logger.info("Exporting %d tables from schema %s", len(table_names), schema_name)

    summary = ExportSummary(schema_name=schema_name, output_dir=str(Path(output_dir).resolve()))
    for table_name in table_names:
        try:
            ddl = generator.generate(TableIdentity(schema_name=schema_name, name=table_name), options)
            path = write_ddl(ddl.sql, output_dir, batch_filename(table_name))
            result = TableExportResult(table_name=table_name, status="success", file_path=str(path))
        except Exception as e:
            logger.warning("Export error for %s.%s: %s", schema_name, table_name, e)
            result = TableExportResult(table_name=table_name, status="error", error=str(e))
        summary.results.append(result)
        if on_result:
            on_result(result)

    summary.duration_seconds = round(time.time() - t0, 2)
    return summary
