"""PostgreSQL dialect."""
from typing import Any, Sequence
from ..domain.models import CatalogQuery, Column
from .base import Dialect
from .decoder import decode_standard_row

TABLES_SQL = """
    SELECT
        table_schema,
        table_name
    FROM information_schema.tables
    WHERE table_type = 'BASE TABLE'
      AND table_schema = :schema
    ORDER BY table_schema, table_name
"""

# Identity covers both SERIAL (nextval default) and GENERATED ... AS IDENTITY.
COLUMNS_SQL = """
    SELECT
        c.column_name,
        c.data_type,
        c.is_nullable,
        c.character_maximum_length,
        c.numeric_precision,
        c.numeric_scale,
        CASE
            WHEN EXISTS (
                SELECT 1
                FROM information_schema.key_column_usage k
                JOIN information_schema.table_constraints tc
                  ON k.constraint_name = tc.constraint_name
                 AND k.constraint_schema = tc.constraint_schema
                 AND k.table_name = tc.table_name
                WHERE k.table_schema = c.table_schema
                  AND k.table_name = c.table_name
                  AND k.column_name = c.column_name
                  AND tc.constraint_type = 'PRIMARY KEY'
            )
            THEN 1
            ELSE 0
        END AS is_primary_key,
        CASE
            WHEN c.is_identity = 'YES' OR c.column_default LIKE 'nextval%' THEN 1
            ELSE 0
        END AS is_identity,
        COALESCE(c.column_default, '') AS column_default
    FROM information_schema.columns c
    WHERE c.table_schema = :schema
      AND c.table_name = :table
    ORDER BY c.ordinal_position
"""

class PostgresDialect(Dialect):
    def table_query(self, default_schema: str) -> CatalogQuery:
        return CatalogQuery(sql=TABLES_SQL, params={"schema": default_schema})

    def column_query(self, schema: str, table: str) -> CatalogQuery:
        return CatalogQuery(sql=COLUMNS_SQL, params={"schema": schema, "table": table})

    def decode_column_row(self, row: Sequence[Any]) -> Column:
        return decode_standard_row(row)
