import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from tablescript.core.catalog_reader import SqlServerCatalogReader, CatalogReader
from tablescript.core.errors import MetadataQueryError
from tablescript.models.table import TableIdentity

IDENTITY = TableIdentity(schema_name="dbo", name="Orders")


def _reader_returning(rows):
    conn = MagicMock()
    conn.execute.return_value.mappings.return_value.all.return_value = rows
    return SqlServerCatalogReader(conn), conn


def test_reader_satisfies_protocol():
    reader, _ = _reader_returning([])
    assert isinstance(reader, CatalogReader)


def test_queries_are_parameterized():
    reader, conn = _reader_returning([{"1": 1}])
    assert reader.table_exists(IDENTITY) is True
    _, params = conn.execute.call_args.args
    assert params == {"schema": "dbo", "table": "Orders"}
    # identifiers never end up inside the SQL text
    assert "Orders" not in str(conn.execute.call_args.args[0])


def test_table_exists_false_when_no_rows():
    reader, _ = _reader_returning([])
    assert reader.table_exists(IDENTITY) is False


def test_list_tables():
    reader, conn = _reader_returning([{"table_name": "A"}, {"table_name": "B"}])
    assert reader.list_tables("dbo") == ["A", "B"]
    assert conn.execute.call_args.args[1] == {"schema": "dbo"}


def test_fetch_columns_normalizes_rows():
    reader, _ = _reader_returning([
        {"column_name": "Name", "data_type": "nvarchar", "max_length": 50, "numeric_precision": None,
         "numeric_scale": None, "is_nullable": "YES", "column_default": None, "ordinal_position": 2,
         "is_identity": 0},
        {"column_name": "Id", "data_type": "int", "max_length": None, "numeric_precision": 10,
         "numeric_scale": 0, "is_nullable": "NO", "column_default": "((0))", "ordinal_position": 1,
         "is_identity": 1},
    ])
    cols = reader.fetch_columns(IDENTITY)
    assert [c.name for c in cols] == ["Id", "Name"]
    assert cols[0].is_identity is True and cols[0].is_nullable is False and cols[0].default == "((0))"
    assert cols[1].is_identity is False and cols[1].is_nullable is True and cols[1].max_length == 50


def test_fetch_columns_identity_property_may_be_null():
    reader, _ = _reader_returning([
        {"column_name": "x", "data_type": "int", "max_length": None, "numeric_precision": 10,
         "numeric_scale": 0, "is_nullable": "YES", "column_default": "", "ordinal_position": 1,
         "is_identity": None},
    ])
    col = reader.fetch_columns(IDENTITY)[0]
    assert col.is_identity is False
    assert col.default is None


def test_fetch_primary_key_orders_by_key_ordinal():
    reader, _ = _reader_returning([
        {"column_name": "b", "constraint_name": "PK_T", "key_ordinal": 2},
        {"column_name": "a", "constraint_name": "PK_T", "key_ordinal": 1},
    ])
    pk = reader.fetch_primary_key(IDENTITY)
    assert pk.name == "PK_T"
    assert pk.columns == ["a", "b"]
    assert pk.exists


def test_fetch_primary_key_absent_is_not_an_error():
    reader, _ = _reader_returning([])
    pk = reader.fetch_primary_key(IDENTITY)
    assert pk.columns == [] and not pk.exists


def test_fetch_indexes_groups_columns_in_key_order():
    reader, _ = _reader_returning([
        {"index_name": "IX_A", "is_unique": False, "column_name": "c2", "key_ordinal": 2},
        {"index_name": "IX_A", "is_unique": False, "column_name": "c1", "key_ordinal": 1},
        {"index_name": "UX_B", "is_unique": True, "column_name": "code", "key_ordinal": 1},
    ])
    indexes = reader.fetch_indexes(IDENTITY)
    assert [(i.name, i.is_unique, i.columns) for i in indexes] == [
        ("IX_A", False, ["c1", "c2"]),
        ("UX_B", True, ["code"]),
    ]


def test_fetch_foreign_keys_pairs_columns_by_ordinal():
    def row(ordinal, col, ref):
        return {"constraint_name": "FK_X", "column_ordinal": ordinal, "column_name": col,
                "referenced_schema": "sales", "referenced_table": "Lines", "referenced_column": ref}

    reader, _ = _reader_returning([row(2, "y", "q"), row(1, "x", "p")])
    fk = reader.fetch_foreign_keys(IDENTITY)[0]
    assert fk.columns == ["x", "y"]
    assert fk.referenced_columns == ["p", "q"]
    assert (fk.referenced_schema, fk.referenced_table) == ("sales", "Lines")


@pytest.mark.parametrize("method", [
    "table_exists", "fetch_columns", "fetch_primary_key", "fetch_indexes", "fetch_foreign_keys",
])
def test_driver_errors_become_metadata_query_errors(method):
    conn = MagicMock()
    cause = OperationalError("SELECT ...", {}, Exception("permission denied"))
    conn.execute.side_effect = cause
    reader = SqlServerCatalogReader(conn)
    with pytest.raises(MetadataQueryError) as exc:
        getattr(reader, method)(IDENTITY)
    assert exc.value.operation == method
    assert exc.value.cause is cause
    assert exc.value.__cause__ is cause
