"""tablescript: reconstruct CREATE/ALTER DDL for SQL Server tables from catalog metadata."""

__version__ = "1.0.0"
