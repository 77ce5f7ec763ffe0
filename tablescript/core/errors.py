"""Typed errors raised by the DDL engine and its I/O collaborators."""
from pathlib import Path
from typing import Optional

from tablescript.models.table import TableIdentity


class DDLError(Exception):
    """Base class for every error tablescript raises on purpose."""


class NotFoundError(DDLError):
    def __init__(self, identity: TableIdentity):
        self.identity = identity
        super().__init__(f"Table '{identity.name}' not found in schema '{identity.schema_name}'")


class MetadataQueryError(DDLError):
    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Catalog query '{operation}' failed: {cause}")


class DatabaseConnectionError(DDLError, ConnectionError):
    def __init__(self, target: str, cause: Optional[BaseException] = None):
        self.target = target
        self.cause = cause
        super().__init__(f"Could not connect to database {target}: {cause}")


class OutputWriteError(DDLError, OSError):
    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")
