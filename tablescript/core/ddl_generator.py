"""
DDL generator: the single engine both the batch and interactive front-ends call.
existence check → columns → primary key → CREATE TABLE → indexes → foreign keys → assembly.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from tablescript.config import settings
from tablescript.core import ddl_assembler
from tablescript.core.catalog_reader import CatalogReader
from tablescript.core.errors import NotFoundError
from tablescript.models.ddl import GeneratedDDL
from tablescript.models.options import GenerationOptions
from tablescript.models.table import TableIdentity

logger = logging.getLogger(__name__)


class DDLGenerator:
    """Generates table DDL from whatever CatalogReader it is given."""

    def __init__(
        self,
        reader: CatalogReader,
        clock: Callable[[], datetime] = datetime.now,
        tool_name: Optional[str] = None,
    ):
        self.reader = reader
        self.clock = clock
        self.tool_name = tool_name or settings.TOOL_NAME

    def list_tables(self, schema_name: str) -> list[str]:
        return self.reader.list_tables(schema_name)

    def generate(self, identity: TableIdentity, options: Optional[GenerationOptions] = None) -> GeneratedDDL:
        """
        Build the full DDL script for one table.

        Raises NotFoundError when the table is absent and lets MetadataQueryError
        from any stage propagate untouched; nothing partial is ever returned.
        """
        options = options or GenerationOptions()

        if not self.reader.table_exists(identity):
            raise NotFoundError(identity)

        generated_at = self.clock()
        columns = self.reader.fetch_columns(identity)
        primary_key = self.reader.fetch_primary_key(identity)
        create_table = ddl_assembler.build_create_table(identity, columns, primary_key)

        indexes: list[str] = []
        if options.include_indexes:
            indexes = [ddl_assembler.build_index_statement(identity, ix) for ix in self.reader.fetch_indexes(identity)]

        foreign_keys: list[str] = []
        if options.include_foreign_keys:
            foreign_keys = [
                ddl_assembler.build_foreign_key_statement(identity, fk)
                for fk in self.reader.fetch_foreign_keys(identity)
            ]

        header = ddl_assembler.build_header(identity, generated_at, self.tool_name)
        logger.info(
            "Generated DDL for %s: %d columns, %d indexes, %d foreign keys",
            identity, len(columns), len(indexes), len(foreign_keys),
        )
        return GeneratedDDL(
            identity=identity,
            generated_at=generated_at,
            header=header,
            create_table=create_table,
            indexes=indexes,
            foreign_keys=foreign_keys,
            sql=ddl_assembler.assemble(header, create_table, indexes, foreign_keys),
        )
