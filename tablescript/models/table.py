"""Pydantic schemas for table identity and catalog descriptors."""
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class TableIdentity(BaseModel):
    schema_name: str = Field(..., min_length=1, description="Owning schema, e.g. dbo")
    name: str = Field(..., min_length=1, description="Table name as stored in the catalog")

    def __str__(self) -> str:
        return f"{self.schema_name}.{self.name}"


class ColumnDescriptor(BaseModel):
    name: str
    data_type: str
    max_length: Optional[int] = None      # -1 means MAX
    precision: Optional[int] = None
    scale: Optional[int] = None
    is_nullable: bool = True
    default: Optional[str] = None         # raw expression, e.g. "((0))"
    ordinal_position: int
    is_identity: bool = False


class PrimaryKeyDescriptor(BaseModel):
    name: Optional[str] = None
    columns: list[str] = Field(default_factory=list)

    @property
    def exists(self) -> bool:
        return bool(self.columns)


class IndexDescriptor(BaseModel):
    name: str
    is_unique: bool = False
    columns: list[str]


class ForeignKeyDescriptor(BaseModel):
    name: str
    columns: list[str]
    referenced_schema: str
    referenced_table: str
    referenced_columns: list[str]

    @model_validator(mode="after")
    def _columns_pair_up(self) -> "ForeignKeyDescriptor":
        if len(self.columns) != len(self.referenced_columns):
            raise ValueError(
                f"Foreign key {self.name!r} has {len(self.columns)} local columns "
                f"but {len(self.referenced_columns)} referenced columns"
            )
        return self
