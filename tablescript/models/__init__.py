from tablescript.models.table import (  # noqa: F401
    TableIdentity, ColumnDescriptor, PrimaryKeyDescriptor, IndexDescriptor, ForeignKeyDescriptor,
)
from tablescript.models.options import GenerationOptions, parse_table_list  # noqa: F401
from tablescript.models.connection import ConnectionRequest  # noqa: F401
from tablescript.models.ddl import GeneratedDDL, TableExportResult, ExportSummary  # noqa: F401
