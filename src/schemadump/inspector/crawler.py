import logging
from typing import List, Tuple
from ..dialects import Dialect
from ..dialects.primary_keys import merge_primary_keys
from ..domain.interfaces import CatalogConnector
from ..domain.models import Column, Table
from ..exceptions import ExtractionError

logger = logging.getLogger(__name__)

class SchemaCrawler:
    """
    SRP: Responsible only for relational metadata crawling.
    Fail fast: any error while listing tables or reading one table's
    columns aborts the whole crawl.
    """
    def __init__(self, connector: CatalogConnector, dialect: Dialect):
        self.connector = connector
        self.dialect = dialect

    def list_tables(self, default_schema: str) -> List[Tuple[str, str]]:
        """(schema, table) pairs in catalog order."""
        try:
            rows = self.connector.execute(self.dialect.table_query(default_schema))
            return [self.dialect.decode_table_row(row) for row in rows]
        except ExtractionError as e:
            raise type(e)("listing tables", e) from e

    def extract_columns(self, schema: str, table: str) -> List[Column]:
        try:
            rows = self.connector.execute(self.dialect.column_query(schema, table))
            columns = [self.dialect.decode_column_row(row) for row in rows]

            resolution = self.dialect.resolve_primary_keys(self.connector, schema, table)
            if resolution is not None:
                columns = merge_primary_keys(columns, resolution)
        except ExtractionError as e:
            raise type(e)(f"extracting columns of {schema}.{table}", e) from e
        return columns

    def extract_table(self, schema: str, table: str) -> Table:
        columns = self.extract_columns(schema, table)
        logger.info(f"Processed table {schema}.{table} ({len(columns)} columns)")
        return Table(table_name=table, schema_name=schema, columns=columns)

    def extract_all(self, default_schema: str) -> List[Table]:
        """
        Crawls every base table of the default schema, in discovery order.
        """
        tables = self.list_tables(default_schema)
        logger.info(f"Found {len(tables)} tables")
        return [self.extract_table(schema, table) for schema, table in tables]
