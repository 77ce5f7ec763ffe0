"""
DDL assembler: turns catalog descriptors into T-SQL statement text.
Pure string building; no catalog access.
"""
from datetime import datetime

from tablescript.core.type_formatter import format_type
from tablescript.models.table import (
    ColumnDescriptor,
    ForeignKeyDescriptor,
    IndexDescriptor,
    PrimaryKeyDescriptor,
    TableIdentity,
)

INDENT = "    "
HEADER_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
INDEXES_COMMENT = "-- Indexes"
FOREIGN_KEYS_COMMENT = "-- Foreign Key Constraints"


# ── Identifiers ───────────────────────────────────────────────────────────────

def quote_identifier(name: str) -> str:
    """Bracket-quote an identifier the way QUOTENAME does (']' doubles)."""
    return "[" + name.replace("]", "]]") + "]"


def qualified_name(schema_name: str, table_name: str) -> str:
    return f"{quote_identifier(schema_name)}.{quote_identifier(table_name)}"


def column_list(columns: list[str]) -> str:
    return "(" + ", ".join(quote_identifier(c) for c in columns) + ")"


# ── Statements ────────────────────────────────────────────────────────────────

def build_column_definition(col: ColumnDescriptor) -> str:
    """[name] type [IDENTITY(1,1)] [NOT NULL] [DEFAULT expr]"""
    parts = [quote_identifier(col.name), format_type(col.data_type, col.max_length, col.precision, col.scale)]
    if col.is_identity:
        parts.append("IDENTITY(1,1)")
    if not col.is_nullable:
        parts.append("NOT NULL")
    # identity columns never carry a DEFAULT, even when the catalog reports one
    if col.default and not col.is_identity:
        parts.append(f"DEFAULT {col.default}")
    return " ".join(parts)


def build_primary_key_clause(pk: PrimaryKeyDescriptor) -> str:
    return f"CONSTRAINT {quote_identifier(pk.name or '')} PRIMARY KEY CLUSTERED {column_list(pk.columns)}"


def build_create_table(
    identity: TableIdentity,
    columns: list[ColumnDescriptor],
    primary_key: PrimaryKeyDescriptor,
) -> str:
    elements = [INDENT + build_column_definition(c) for c in sorted(columns, key=lambda c: c.ordinal_position)]
    if primary_key.exists:
        elements.append(INDENT + build_primary_key_clause(primary_key))
    body = ",\n".join(elements)
    return f"CREATE TABLE {qualified_name(identity.schema_name, identity.name)} (\n{body}\n);\n"


def build_index_statement(identity: TableIdentity, index: IndexDescriptor) -> str:
    kind = "CREATE UNIQUE INDEX" if index.is_unique else "CREATE INDEX"
    return (
        f"{kind} {quote_identifier(index.name)} "
        f"ON {qualified_name(identity.schema_name, identity.name)} {column_list(index.columns)};"
    )


def build_foreign_key_statement(identity: TableIdentity, fk: ForeignKeyDescriptor) -> str:
    return (
        f"ALTER TABLE {qualified_name(identity.schema_name, identity.name)} "
        f"ADD CONSTRAINT {quote_identifier(fk.name)} "
        f"FOREIGN KEY {column_list(fk.columns)} "
        f"REFERENCES {qualified_name(fk.referenced_schema, fk.referenced_table)} {column_list(fk.referenced_columns)};"
    )


def build_header(identity: TableIdentity, generated_at: datetime, tool_name: str) -> str:
    return (
        f"-- DDL for table: {identity.schema_name}.{identity.name}\n"
        f"-- Generated by {tool_name} on {generated_at.strftime(HEADER_TIMESTAMP_FORMAT)}\n"
    )


# ── Assembly ──────────────────────────────────────────────────────────────────

def assemble(header: str, create_table: str, indexes: list[str], foreign_keys: list[str]) -> str:
    """
    header, blank line, CREATE TABLE, then the index and foreign key sections.
    A section with no statements is left out entirely.
    """
    chunks = [header, "\n", create_table]
    if indexes:
        chunks.append(f"\n{INDEXES_COMMENT}\n")
        chunks.extend(f"{stmt}\n" for stmt in indexes)
    if foreign_keys:
        chunks.append(f"\n{FOREIGN_KEYS_COMMENT}\n")
        chunks.extend(f"{stmt}\n" for stmt in foreign_keys)
    return "".join(chunks)
