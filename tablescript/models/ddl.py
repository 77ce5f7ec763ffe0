"""Pydantic schemas for generated DDL and batch export results."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

from tablescript.models.table import TableIdentity


class GeneratedDDL(BaseModel):
    identity: TableIdentity
    generated_at: datetime
    header: str
    create_table: str
    indexes: list[str] = Field(default_factory=list)
    foreign_keys: list[str] = Field(default_factory=list)
    sql: str                       # the fully assembled script


class TableExportResult(BaseModel):
    table_name: str
    status: Literal["success", "error"]
    file_path: Optional[str] = None
    error: Optional[str] = None


class ExportSummary(BaseModel):
    schema_name: str
    output_dir: str
    duration_seconds: float = 0.0
    results: list[TableExportResult] = Field(default_factory=list)

    @property
    def tables_exported(self) -> int:
        return sum(1 for r in self.results if r.status == "success")

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.status == "error")
