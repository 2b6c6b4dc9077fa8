"""
Sybase ASE dialect (system tables).

No native parameter binding is assumed on this path, so owner and table
names are embedded as string literals. Every name is validated first and
anything that could break out of a quoted literal is rejected.
"""
import re
from typing import Any, Sequence
from ..domain.interfaces import CatalogConnector
from ..domain.models import CatalogQuery, Column, PrimaryKeyResolution
from ..exceptions import UnsafeIdentifierError
from .base import Dialect
from .decoder import decode_legacy_row
from .primary_keys import PrimaryKeyResolver, PrimaryKeyStrategy

MAX_IDENTIFIER_LENGTH = 255

# quotes, backslash, statement separators, comments, control characters
_UNSAFE_IDENTIFIER = re.compile(r"['\"`\\;]|--|/\*|\*/|[\x00-\x1f\x7f]")

def quote_literal(name: str, what: str = "identifier") -> str:
    if not isinstance(name, str) or not name:
        raise UnsafeIdentifierError(f"embedding {what}", f"empty {what}")
    if len(name) > MAX_IDENTIFIER_LENGTH or _UNSAFE_IDENTIFIER.search(name):
        raise UnsafeIdentifierError(f"embedding {what}", f"refusing unsafe {what} {name!r}")
    return f"'{name}'"

# Character types are the only ones whose syscolumns.length is a max length.
CHARACTER_TYPES = (
    "char", "varchar", "nchar", "nvarchar", "unichar", "univarchar",
    "sysname", "longsysname",
)

TABLES_SQL = """
    SELECT
        user_name(uid) AS schema_name,
        name AS table_name
    FROM sysobjects
    WHERE type = 'U'
      AND user_name(uid) = {owner}
    ORDER BY schema_name, table_name
"""

COLUMNS_SQL = """
    SELECT
        c.name AS column_name,
        t.name AS data_type,
        CASE WHEN t.name IN ({character_types}) THEN c.length ELSE NULL END AS max_length,
        c.prec AS numeric_precision,
        c.scale AS numeric_scale,
        CASE WHEN c.status & 8 = 8 THEN 'YES' ELSE 'NO' END AS is_nullable,
        CASE WHEN c.status & 128 = 128 THEN 1 ELSE 0 END AS is_identity,
        ISNULL(OBJECT_NAME(c.cdefault), '') AS default_value,
        0 AS is_primary_key
    FROM syscolumns c
    JOIN systypes t ON c.usertype = t.usertype
    WHERE c.id = object_id({qualified})
    ORDER BY c.colid
"""

# Unique index (status & 2) flagged as backing the primary key (status & 2048).
# index_col() walks the key positions; syscolumns.colid supplies the numbers.
PK_INDEX_SQL = """
    SELECT
        index_col(o.name, i.indid, c.colid, o.uid) AS column_name
    FROM sysindexes i
    JOIN sysobjects o ON o.id = i.id
    JOIN syscolumns c ON c.id = i.id
    WHERE o.name = {table}
      AND user_name(o.uid) = {owner}
      AND i.indid > 0
      AND i.status & 2 = 2
      AND i.status & 2048 = 2048
      AND index_col(o.name, i.indid, c.colid, o.uid) IS NOT NULL
    ORDER BY c.colid
"""

# Keys declared through sp_primarykey live in syskeys (type 1 = primary).
PK_SYSKEYS_SQL = """
    SELECT
        c.name AS column_name
    FROM syskeys k, sysobjects o, syscolumns c
    WHERE o.id = object_id({qualified})
      AND k.id = o.id
      AND k.type = 1
      AND c.id = k.id
      AND c.colid IN (k.key1, k.key2, k.key3, k.key4, k.key5, k.key6, k.key7, k.key8)
    ORDER BY c.colid
"""

def _qualified(owner: str, table: str) -> str:
    # Each part is its own identifier with its own length limit
    quote_literal(owner, "owner name")
    quote_literal(table, "table name")
    return f"'{owner}.{table}'"

def pk_index_query(owner: str, table: str) -> CatalogQuery:
    sql = PK_INDEX_SQL.format(
        table=quote_literal(table, "table name"),
        owner=quote_literal(owner, "owner name"),
    )
    return CatalogQuery(sql=sql, literal=True)

def pk_syskeys_query(owner: str, table: str) -> CatalogQuery:
    return CatalogQuery(sql=PK_SYSKEYS_SQL.format(qualified=_qualified(owner, table)), literal=True)

PRIMARY_KEY_STRATEGIES = (
    PrimaryKeyStrategy("sysindexes", pk_index_query),
    PrimaryKeyStrategy("syskeys", pk_syskeys_query),
)

class SybaseDialect(Dialect):
    def __init__(self, resolver: PrimaryKeyResolver = None):
        self.resolver = resolver or PrimaryKeyResolver(PRIMARY_KEY_STRATEGIES)

    def table_query(self, default_schema: str) -> CatalogQuery:
        sql = TABLES_SQL.format(owner=quote_literal(default_schema, "owner name"))
        return CatalogQuery(sql=sql, literal=True)

    def column_query(self, schema: str, table: str) -> CatalogQuery:
        sql = COLUMNS_SQL.format(
            character_types=", ".join(f"'{t}'" for t in CHARACTER_TYPES),
            qualified=_qualified(schema, table),
        )
        return CatalogQuery(sql=sql, literal=True)

    def decode_column_row(self, row: Sequence[Any]) -> Column:
        return decode_legacy_row(row)

    def resolve_primary_keys(
        self, connector: CatalogConnector, schema: str, table: str
    ) -> PrimaryKeyResolution:
        return self.resolver.resolve(connector, schema, table)
