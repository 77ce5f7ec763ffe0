from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

custom_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
})

console = Console(theme=custom_theme)
err_console = Console(theme=custom_theme, stderr=True)

BORDER = "=" * 60


def print_step(message: str) -> None:
    console.print(f"[info]{escape(message)}[/info]", soft_wrap=True)

def print_success(message: str) -> None:
    console.print(f"[success]✔ {escape(message)}[/success]", soft_wrap=True)

def print_warning(message: str) -> None:
    err_console.print(f"[warning]! {escape(message)}[/warning]", soft_wrap=True)

def print_error(message: str) -> None:
    err_console.print(f"[error]✘ Error:[/error] {escape(message)}", highlight=False, soft_wrap=True)

def print_plain(text: str = "", end: str = "\n") -> None:
    """Print text verbatim; bracket-quoted SQL must never be read as rich markup."""
    console.print(text, end=end, markup=False, highlight=False, soft_wrap=True)

def display_ddl(ddl: str, table_name: str) -> None:
    """Show DDL framed by a border, for humans only."""
    print_plain()
    print_plain(BORDER)
    print_plain(f"DDL for table: {table_name.upper()}")
    print_plain(BORDER)
    print_plain(ddl)
    print_plain(BORDER)
