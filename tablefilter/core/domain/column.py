"""
Column Descriptor Value Object.

Identifies a column of a data source together with its semantic type.

This is a PURE PYTHON module with NO UI toolkit dependencies.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Immutable reference to a data source column.

    Attributes:
        index: Position of the column in the data source model
        semantic_type: Python type of the column values (``str``, ``int``, ``date``...)
        name: Optional column header, only used for logging and repr

    Example:
        >>> age = ColumnDescriptor(index=1, semantic_type=int, name="age")
        >>> age.is_string
        False
    """
    index: int
    semantic_type: Any = str
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Column index cannot be negative, got {self.index}")
        if self.semantic_type is None:
            # unknown types are handled as strings
            object.__setattr__(self, 'semantic_type', str)

    @property
    def is_string(self) -> bool:
        """Check if the column holds plain text."""
        return self.semantic_type is str

    @property
    def label(self) -> str:
        """Name if available, otherwise the index."""
        return self.name if self.name else f"#{self.index}"

    def __str__(self) -> str:
        return f"Column({self.label}: {getattr(self.semantic_type, '__name__', self.semantic_type)})"
