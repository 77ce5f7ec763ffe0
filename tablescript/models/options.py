"""Per-call generation options."""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class GenerationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    include_indexes: bool = True
    include_foreign_keys: bool = True


def parse_table_list(raw: Optional[str]) -> list[str]:
    """Split a comma-separated table list, trimming blanks and dropping empty entries."""
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]
