"""
Type formatter: canonical SQL Server column type declarations.
Maps a catalog (type, length, precision, scale) tuple to declaration text.
"""
from typing import Optional

# CHARACTER_MAXIMUM_LENGTH reports -1 for varchar(max) and friends
UNBOUNDED_LENGTH = -1

VARIABLE_LENGTH_TYPES = {"varchar", "nvarchar", "varbinary"}
FIXED_LENGTH_TYPES = {"char", "nchar", "binary"}
EXACT_NUMERIC_TYPES = {"decimal", "numeric"}
APPROXIMATE_NUMERIC_TYPES = {"float"}


def format_type(
    type_name: str,
    max_length: Optional[int] = None,
    precision: Optional[int] = None,
    scale: Optional[int] = None,
) -> str:
    """
    Render a column type declaration.

    Length-bound types carry their length (or MAX), decimal/numeric carry
    precision and scale, float carries precision. Anything else is returned
    exactly as the catalog spelled it. Never raises.
    """
    key = (type_name or "").lower()

    if key in VARIABLE_LENGTH_TYPES:
        if max_length is None:
            return key
        if max_length == UNBOUNDED_LENGTH:
            return f"{key}(MAX)"
        return f"{key}({max_length})"

    if key in FIXED_LENGTH_TYPES:
        return f"{key}({max_length})" if max_length is not None else key

    if key in EXACT_NUMERIC_TYPES:
        # numeric is emitted as its synonym decimal
        if precision is not None and scale is not None:
            return f"decimal({precision},{scale})"
        if precision is not None:
            return f"decimal({precision})"
        return "decimal"

    if key in APPROXIMATE_NUMERIC_TYPES:
        return f"float({precision})" if precision is not None else "float"

    return type_name if type_name is not None else ""
