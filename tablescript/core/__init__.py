from tablescript.core.type_formatter import format_type  # noqa: F401
from tablescript.core.catalog_reader import CatalogReader, SqlServerCatalogReader  # noqa: F401
from tablescript.core.ddl_generator import DDLGenerator  # noqa: F401
from tablescript.core.db_connector import create_engine_from_request, catalog_connection  # noqa: F401
from tablescript.core.exporter import export_schema  # noqa: F401
