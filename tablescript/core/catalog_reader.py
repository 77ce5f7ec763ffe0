"""
Catalog reader: parameterized metadata queries against SQL Server.
INFORMATION_SCHEMA views for tables/columns/primary keys, sys.* catalog views
for indexes, foreign keys and the identity property.
"""
import logging
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from tablescript.core.errors import MetadataQueryError
from tablescript.models.table import (
    ColumnDescriptor,
    ForeignKeyDescriptor,
    IndexDescriptor,
    PrimaryKeyDescriptor,
    TableIdentity,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class CatalogReader(Protocol):
    """
    Structural definition of a metadata reader.
    Any class implementing these methods can feed the DDL generator, which
    lets other catalog dialects (or an in-memory fake) stand in for SQL Server.
    """

    def table_exists(self, identity: TableIdentity) -> bool:
        ...

    def list_tables(self, schema_name: str) -> list[str]:
        ...

    def fetch_columns(self, identity: TableIdentity) -> list[ColumnDescriptor]:
        ...

    def fetch_primary_key(self, identity: TableIdentity) -> PrimaryKeyDescriptor:
        ...

    def fetch_indexes(self, identity: TableIdentity) -> list[IndexDescriptor]:
        ...

    def fetch_foreign_keys(self, identity: TableIdentity) -> list[ForeignKeyDescriptor]:
        ...


# ── Catalog queries ───────────────────────────────────────────────────────────

TABLE_EXISTS_SQL = """
    SELECT 1
    FROM INFORMATION_SCHEMA.TABLES
    WHERE TABLE_SCHEMA = :schema
        AND TABLE_NAME = :table
        AND TABLE_TYPE = 'BASE TABLE'
"""

LIST_TABLES_SQL = """
    SELECT TABLE_NAME AS table_name
    FROM INFORMATION_SCHEMA.TABLES
    WHERE TABLE_SCHEMA = :schema
        AND TABLE_TYPE = 'BASE TABLE'
    ORDER BY TABLE_NAME
"""

COLUMNS_SQL = """
    SELECT
        c.COLUMN_NAME AS column_name,
        c.DATA_TYPE AS data_type,
        c.CHARACTER_MAXIMUM_LENGTH AS max_length,
        c.NUMERIC_PRECISION AS numeric_precision,
        c.NUMERIC_SCALE AS numeric_scale,
        c.IS_NULLABLE AS is_nullable,
        c.COLUMN_DEFAULT AS column_default,
        c.ORDINAL_POSITION AS ordinal_position,
        COLUMNPROPERTY(
            OBJECT_ID(QUOTENAME(c.TABLE_SCHEMA) + '.' + QUOTENAME(c.TABLE_NAME)),
            c.COLUMN_NAME,
            'IsIdentity'
        ) AS is_identity
    FROM INFORMATION_SCHEMA.COLUMNS c
    WHERE c.TABLE_SCHEMA = :schema AND c.TABLE_NAME = :table
    ORDER BY c.ORDINAL_POSITION
"""

PRIMARY_KEY_SQL = """
    SELECT
        kcu.COLUMN_NAME AS column_name,
        tc.CONSTRAINT_NAME AS constraint_name,
        kcu.ORDINAL_POSITION AS key_ordinal
    FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc
    JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu
        ON tc.CONSTRAINT_NAME = kcu.CONSTRAINT_NAME
        AND tc.TABLE_SCHEMA = kcu.TABLE_SCHEMA
        AND tc.TABLE_NAME = kcu.TABLE_NAME
    WHERE tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
        AND tc.TABLE_SCHEMA = :schema
        AND tc.TABLE_NAME = :table
    ORDER BY kcu.ORDINAL_POSITION
"""

# key_ordinal is 0 for INCLUDE columns; heaps (type 0) and disabled or
# hypothetical indexes have nothing to script.
INDEXES_SQL = """
    SELECT
        i.name AS index_name,
        i.is_unique AS is_unique,
        c.name AS column_name,
        ic.key_ordinal AS key_ordinal
    FROM sys.indexes i
    JOIN sys.index_columns ic ON i.object_id = ic.object_id AND i.index_id = ic.index_id
    JOIN sys.columns c ON ic.object_id = c.object_id AND ic.column_id = c.column_id
    JOIN sys.tables t ON i.object_id = t.object_id
    JOIN sys.schemas s ON t.schema_id = s.schema_id
    WHERE s.name = :schema
        AND t.name = :table
        AND i.is_primary_key = 0
        AND i.type > 0
        AND i.is_disabled = 0
        AND i.is_hypothetical = 0
        AND ic.key_ordinal > 0
    ORDER BY i.name, ic.key_ordinal
"""

FOREIGN_KEYS_SQL = """
    SELECT
        fk.name AS constraint_name,
        fkc.constraint_column_id AS column_ordinal,
        c.name AS column_name,
        rs.name AS referenced_schema,
        rt.name AS referenced_table,
        rc.name AS referenced_column
    FROM sys.foreign_keys fk
    JOIN sys.foreign_key_columns fkc ON fk.object_id = fkc.constraint_object_id
    JOIN sys.columns c ON fkc.parent_object_id = c.object_id AND fkc.parent_column_id = c.column_id
    JOIN sys.columns rc ON fkc.referenced_object_id = rc.object_id AND fkc.referenced_column_id = rc.column_id
    JOIN sys.tables t ON fk.parent_object_id = t.object_id
    JOIN sys.schemas s ON t.schema_id = s.schema_id
    JOIN sys.tables rt ON fk.referenced_object_id = rt.object_id
    JOIN sys.schemas rs ON rt.schema_id = rs.schema_id
    WHERE s.name = :schema AND t.name = :table
    ORDER BY fk.name, fkc.constraint_column_id
"""


def _group_ordered(rows: list, key: str) -> dict[str, list]:
    """Group rows by `key`, keeping groups in the order the catalog returned them."""
    groups: dict[str, list] = {}
    for row in rows:
        groups.setdefault(row[key], []).append(row)
    return groups


class SqlServerCatalogReader:
    """CatalogReader over a single open SQLAlchemy connection to SQL Server."""

    def __init__(self, conn: Connection):
        self.conn = conn

    # ── Query plumbing ───────────────────────────────────────────────────────

    def _run(self, operation: str, sql: str, params: dict[str, Any], build: Callable[[list], T]) -> T:
        """
        Execute one catalog query and shape its rows.
        Rows are fully materialized before shaping so a failure never leaks a
        partial result; any driver error becomes a MetadataQueryError.
        """
        try:
            rows = self.conn.execute(text(sql), params).mappings().all()
        except SQLAlchemyError as e:
            logger.debug("Catalog query %s failed: %s", operation, e)
            raise MetadataQueryError(operation, e) from e
        logger.debug("%s returned %d rows for %s", operation, len(rows), params)
        return build(rows)

    @staticmethod
    def _params(identity: TableIdentity) -> dict[str, str]:
        return {"schema": identity.schema_name, "table": identity.name}

    # ── CatalogReader ────────────────────────────────────────────────────────

    def table_exists(self, identity: TableIdentity) -> bool:
        return self._run("table_exists", TABLE_EXISTS_SQL, self._params(identity), lambda rows: bool(rows))

    def list_tables(self, schema_name: str) -> list[str]:
        return self._run(
            "list_tables", LIST_TABLES_SQL, {"schema": schema_name},
            lambda rows: [r["table_name"] for r in rows],
        )

    def fetch_columns(self, identity: TableIdentity) -> list[ColumnDescriptor]:
        def build(rows) -> list[ColumnDescriptor]:
            columns = [
                ColumnDescriptor(
                    name=r["column_name"],
                    data_type=r["data_type"],
                    max_length=r["max_length"],
                    precision=r["numeric_precision"],
                    scale=r["numeric_scale"],
                    is_nullable=(r["is_nullable"] or "").upper() != "NO",
                    default=r["column_default"] or None,
                    ordinal_position=r["ordinal_position"],
                    is_identity=bool(r["is_identity"]),
                )
                for r in rows
            ]
            return sorted(columns, key=lambda c: c.ordinal_position)

        return self._run("fetch_columns", COLUMNS_SQL, self._params(identity), build)

    def fetch_primary_key(self, identity: TableIdentity) -> PrimaryKeyDescriptor:
        def build(rows) -> PrimaryKeyDescriptor:
            if not rows:
                return PrimaryKeyDescriptor()
            ordered = sorted(rows, key=lambda r: r["key_ordinal"])
            return PrimaryKeyDescriptor(
                name=ordered[0]["constraint_name"],
                columns=[r["column_name"] for r in ordered],
            )

        return self._run("fetch_primary_key", PRIMARY_KEY_SQL, self._params(identity), build)

    def fetch_indexes(self, identity: TableIdentity) -> list[IndexDescriptor]:
        def build(rows) -> list[IndexDescriptor]:
            result = []
            for name, members in _group_ordered(rows, "index_name").items():
                members = sorted(members, key=lambda r: r["key_ordinal"])
                result.append(IndexDescriptor(
                    name=name,
                    is_unique=bool(members[0]["is_unique"]),
                    columns=[r["column_name"] for r in members],
                ))
            return result

        return self._run("fetch_indexes", INDEXES_SQL, self._params(identity), build)

    def fetch_foreign_keys(self, identity: TableIdentity) -> list[ForeignKeyDescriptor]:
        def build(rows) -> list[ForeignKeyDescriptor]:
            result = []
            for name, members in _group_ordered(rows, "constraint_name").items():
                # local column i pairs with referenced column i
                members = sorted(members, key=lambda r: r["column_ordinal"])
                result.append(ForeignKeyDescriptor(
                    name=name,
                    columns=[r["column_name"] for r in members],
                    referenced_schema=members[0]["referenced_schema"],
                    referenced_table=members[0]["referenced_table"],
                    referenced_columns=[r["referenced_column"] for r in members],
                ))
            return result

        return self._run("fetch_foreign_keys", FOREIGN_KEYS_SQL, self._params(identity), build)
