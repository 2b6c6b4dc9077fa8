"""MySQL / MariaDB dialect, scoped to the connected database."""
from typing import Any, Sequence
from ..domain.models import CatalogQuery, Column
from .base import Dialect
from .decoder import decode_standard_row

# The default schema is ignored: a MySQL schema *is* the database.
TABLES_SQL = """
    SELECT
        TABLE_SCHEMA,
        TABLE_NAME
    FROM INFORMATION_SCHEMA.TABLES
    WHERE TABLE_TYPE = 'BASE TABLE'
      AND TABLE_SCHEMA = DATABASE()
    ORDER BY TABLE_SCHEMA, TABLE_NAME
"""

COLUMNS_SQL = """
    SELECT
        COLUMN_NAME,
        DATA_TYPE,
        IS_NULLABLE,
        CHARACTER_MAXIMUM_LENGTH,
        NUMERIC_PRECISION,
        NUMERIC_SCALE,
        CASE WHEN COLUMN_KEY = 'PRI' THEN 1 ELSE 0 END AS IS_PRIMARY_KEY,
        CASE WHEN EXTRA LIKE '%auto_increment%' THEN 1 ELSE 0 END AS IS_IDENTITY,
        COALESCE(COLUMN_DEFAULT, '') AS COLUMN_DEFAULT
    FROM INFORMATION_SCHEMA.COLUMNS
    WHERE TABLE_SCHEMA = :schema
      AND TABLE_NAME = :table
    ORDER BY ORDINAL_POSITION
"""

class MySqlDialect(Dialect):
    # MySQL 8 information_schema may hand back VARBINARY text
    allows_bytes = True

    def table_query(self, default_schema: str) -> CatalogQuery:
        return CatalogQuery(sql=TABLES_SQL)

    def column_query(self, schema: str, table: str) -> CatalogQuery:
        return CatalogQuery(sql=COLUMNS_SQL, params={"schema": schema, "table": table})

    def decode_column_row(self, row: Sequence[Any]) -> Column:
        return decode_standard_row(row, allow_bytes=True)
