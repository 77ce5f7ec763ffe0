from tablescript.cli.export_tables import run_export_tables  # noqa: F401
from tablescript.cli.export_table import run_export_table  # noqa: F401
from tablescript.cli.interactive import run_interactive  # noqa: F401
