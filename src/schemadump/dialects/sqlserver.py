"""Microsoft SQL Server dialect."""
from typing import Any, Sequence
from ..domain.models import CatalogQuery, Column
from .base import Dialect
from .decoder import decode_standard_row

TABLES_SQL = """
    SELECT
        TABLE_SCHEMA,
        TABLE_NAME
    FROM INFORMATION_SCHEMA.TABLES
    WHERE TABLE_TYPE = 'BASE TABLE'
      AND TABLE_SCHEMA = :schema
    ORDER BY TABLE_SCHEMA, TABLE_NAME
"""

COLUMNS_SQL = """
    SELECT
        c.COLUMN_NAME,
        c.DATA_TYPE,
        c.IS_NULLABLE,
        c.CHARACTER_MAXIMUM_LENGTH,
        c.NUMERIC_PRECISION,
        c.NUMERIC_SCALE,
        CASE WHEN pk.COLUMN_NAME IS NOT NULL THEN 1 ELSE 0 END AS IS_PRIMARY_KEY,
        COLUMNPROPERTY(
            OBJECT_ID(QUOTENAME(c.TABLE_SCHEMA) + '.' + QUOTENAME(c.TABLE_NAME)),
            c.COLUMN_NAME,
            'IsIdentity'
        ) AS IS_IDENTITY,
        COALESCE(c.COLUMN_DEFAULT, '') AS COLUMN_DEFAULT
    FROM INFORMATION_SCHEMA.COLUMNS c
    LEFT JOIN (
        SELECT
            ku.TABLE_SCHEMA,
            ku.TABLE_NAME,
            ku.COLUMN_NAME
        FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc
        INNER JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE ku
            ON tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
            AND tc.CONSTRAINT_SCHEMA = ku.CONSTRAINT_SCHEMA
            AND tc.CONSTRAINT_NAME = ku.CONSTRAINT_NAME
    ) pk ON c.TABLE_SCHEMA = pk.TABLE_SCHEMA
        AND c.TABLE_NAME = pk.TABLE_NAME
        AND c.COLUMN_NAME = pk.COLUMN_NAME
    WHERE c.TABLE_SCHEMA = :schema
      AND c.TABLE_NAME = :table
    ORDER BY c.ORDINAL_POSITION
"""

class SqlServerDialect(Dialect):
    def table_query(self, default_schema: str) -> CatalogQuery:
        return CatalogQuery(sql=TABLES_SQL, params={"schema": default_schema})

    def column_query(self, schema: str, table: str) -> CatalogQuery:
        return CatalogQuery(sql=COLUMNS_SQL, params={"schema": schema, "table": table})

    def decode_column_row(self, row: Sequence[Any]) -> Column:
        return decode_standard_row(row)
