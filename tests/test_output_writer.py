import pytest
from datetime import datetime

from tablescript.core.errors import OutputWriteError
from tablescript.core.output_writer import batch_filename, interactive_save_dir, timestamped_filename, write_ddl


def test_filenames():
    assert batch_filename("OrderLines") == "orderlines.sql"
    assert timestamped_filename("OrderLines", datetime(2024, 3, 5, 14, 7, 9)) == "orderlines_20240305_140709.sql"


def test_interactive_save_dir(tmp_path):
    assert interactive_save_dir(tmp_path) == tmp_path / "scripts" / "tables"


def test_write_ddl_creates_directory_and_writes_utf8(tmp_path):
    target = tmp_path / "out" / "nested"
    path = write_ddl("-- ünïcode\nCREATE TABLE [x] (\n);\n", target, "x.sql")
    assert path == (target / "x.sql").resolve()
    assert path.read_bytes() == "-- ünïcode\nCREATE TABLE [x] (\n);\n".encode("utf-8")


def test_write_ddl_failure_is_typed(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(OutputWriteError) as exc:
        write_ddl("x", blocker, "t.sql")
    assert exc.value.path == blocker / "t.sql"
    assert isinstance(exc.value, OSError)
