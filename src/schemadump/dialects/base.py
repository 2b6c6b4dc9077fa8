"""
Dialect base class for multi-database catalog extraction.

Each relational backend implements this interface once; the extractor picks
the implementation by backend kind at the start of a run and never branches
on the kind again.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Tuple
from ..domain.interfaces import CatalogConnector
from ..domain.models import CatalogQuery, Column, PrimaryKeyResolution
from .decoder import to_name
from ..exceptions import RowDecodeError

class Dialect(ABC):
    """Abstract base for catalog dialects."""

    # Some drivers return catalog text columns as bytes
    allows_bytes: bool = False

    @abstractmethod
    def table_query(self, default_schema: str) -> CatalogQuery:
        """Query listing (schema, table) of every base table, ordered by schema, name."""
        pass

    @abstractmethod
    def column_query(self, schema: str, table: str) -> CatalogQuery:
        """Query listing the columns of one table in ordinal order."""
        pass

    @abstractmethod
    def decode_column_row(self, row: Sequence[Any]) -> Column:
        """Convert one row of column_query() into a Column."""
        pass

    def decode_table_row(self, row: Sequence[Any]) -> Tuple[str, str]:
        if row is None or len(row) != 2:
            raise RowDecodeError("decoding table row", f"expected 2 fields, got {row!r}")
        return (
            to_name(row[0], "table schema", self.allows_bytes),
            to_name(row[1], "table name", self.allows_bytes),
        )

    def resolve_primary_keys(
        self, connector: CatalogConnector, schema: str, table: str
    ) -> Optional[PrimaryKeyResolution]:
        """
        Separate primary-key lookup for dialects whose column query cannot
        report it. None means the column query already did.
        """
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
