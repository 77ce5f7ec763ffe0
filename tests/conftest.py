import os
import sys

# Add the repository root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from datetime import datetime

from tablescript.core.errors import MetadataQueryError
from tablescript.models.table import (
    ColumnDescriptor, ForeignKeyDescriptor, IndexDescriptor, PrimaryKeyDescriptor, TableIdentity,
)

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9)


class FakeCatalogReader:
    """In-memory CatalogReader keyed by (schema, table)."""

    def __init__(self):
        self.tables: dict[tuple[str, str], dict] = {}
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    def add_table(self, schema, name, columns, primary_key=None, indexes=None, foreign_keys=None):
        self.tables[(schema, name)] = {
            "columns": columns,
            "primary_key": primary_key or PrimaryKeyDescriptor(),
            "indexes": indexes or [],
            "foreign_keys": foreign_keys or [],
        }

    def _get(self, operation, identity):
        self.calls.append(operation)
        if operation in self.fail_on:
            raise MetadataQueryError(operation, RuntimeError("permission denied"))
        return self.tables[(identity.schema_name, identity.name)]

    def table_exists(self, identity):
        self.calls.append("table_exists")
        if "table_exists" in self.fail_on:
            raise MetadataQueryError("table_exists", RuntimeError("connection lost"))
        return (identity.schema_name, identity.name) in self.tables

    def list_tables(self, schema_name):
        self.calls.append("list_tables")
        return sorted(name for schema, name in self.tables if schema == schema_name)

    def fetch_columns(self, identity):
        return list(self._get("fetch_columns", identity)["columns"])

    def fetch_primary_key(self, identity):
        return self._get("fetch_primary_key", identity)["primary_key"]

    def fetch_indexes(self, identity):
        return list(self._get("fetch_indexes", identity)["indexes"])

    def fetch_foreign_keys(self, identity):
        return list(self._get("fetch_foreign_keys", identity)["foreign_keys"])


@pytest.fixture
def orders_identity():
    return TableIdentity(schema_name="dbo", name="Orders")


@pytest.fixture
def fake_reader():
    reader = FakeCatalogReader()
    reader.add_table(
        "dbo", "Orders",
        columns=[
            ColumnDescriptor(name="OrderId", data_type="int", is_nullable=False, ordinal_position=1,
                             is_identity=True, default="((0))"),
            ColumnDescriptor(name="CustomerId", data_type="int", is_nullable=False, ordinal_position=2),
            ColumnDescriptor(name="Notes", data_type="nvarchar", max_length=-1, ordinal_position=4),
            ColumnDescriptor(name="Total", data_type="decimal", precision=10, scale=2, is_nullable=False,
                             default="((0))", ordinal_position=3),
        ],
        primary_key=PrimaryKeyDescriptor(name="PK_Orders", columns=["OrderId"]),
        indexes=[IndexDescriptor(name="IX_Orders_CustomerId", columns=["CustomerId"])],
        foreign_keys=[ForeignKeyDescriptor(
            name="FK_Orders_Customers", columns=["CustomerId"],
            referenced_schema="sales", referenced_table="Customers", referenced_columns=["Id"],
        )],
    )
    reader.add_table(
        "dbo", "Customers",
        columns=[ColumnDescriptor(name="Id", data_type="int", is_nullable=False, ordinal_position=1)],
        primary_key=PrimaryKeyDescriptor(name="PK_Customers", columns=["Id"]),
    )
    return reader
