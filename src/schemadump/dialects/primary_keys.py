"""
Primary-key discovery for catalogs whose column query cannot report it.

Strategies are tried in order. A strategy "fails" only when its query
cannot be executed; a query that runs and returns no rows is a valid
answer ("no primary key") and ends the chain. When every strategy fails
the resolver returns an unresolved, empty result instead of raising.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence
from ..domain.interfaces import CatalogConnector
from ..domain.models import CatalogQuery, Column, PrimaryKeyResolution
from ..exceptions import QueryExecutionError, RowDecodeError
from .decoder import to_name

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class PrimaryKeyStrategy:
    name: str
    build_query: Callable[[str, str], CatalogQuery]  # (schema, table) -> query

class PrimaryKeyResolver:
    def __init__(self, strategies: Sequence[PrimaryKeyStrategy]):
        if not strategies:
            raise ValueError("PrimaryKeyResolver needs at least one strategy")
        self.strategies = list(strategies)

    def resolve(self, connector: CatalogConnector, schema: str, table: str) -> PrimaryKeyResolution:
        for strategy in self.strategies:
            query = strategy.build_query(schema, table)
            try:
                rows = connector.execute(query)
            except QueryExecutionError as e:
                logger.warning(
                    f"Primary key strategy '{strategy.name}' failed for {schema}.{table}: {e.cause}"
                )
                continue

            columns = frozenset(self._decode(rows))
            logger.debug(
                f"Primary key of {schema}.{table} via '{strategy.name}': {sorted(columns)}"
            )
            return PrimaryKeyResolution(table_name=table, columns=columns, strategy=strategy.name)

        logger.warning(
            f"Could not determine primary key of {schema}.{table}; all columns marked non-key"
        )
        return PrimaryKeyResolution(table_name=table)

    @staticmethod
    def _decode(rows: Sequence[Sequence]) -> List[str]:
        names = []
        for row in rows:
            if not row:
                raise RowDecodeError("decoding primary key row", "empty row")
            names.append(to_name(row[0], "primary key column"))
        return names

def merge_primary_keys(columns: Sequence[Column], resolution: PrimaryKeyResolution) -> List[Column]:
    """
    Marks exactly the resolved names as primary-key members.
    Names that match no decoded column are ignored.
    """
    return [
        col.model_copy(update={"is_primary_key": col.column_name in resolution.columns})
        for col in columns
    ]
