import logging
from typing import Optional, Union
from pydantic import BaseModel
from ..config import DatabaseConfig
from ..dialects import get_dialect
from ..domain.interfaces import CatalogConnector, DocumentConnector
from ..domain.models import BackendKind, CollectionSchema, ConnectionHealth, DatabaseSchema
from .assembler import assemble_collection_schema, assemble_database_schema
from .checker import ConnectionChecker
from .crawler import SchemaCrawler
from .documents import CollectionCrawler

logger = logging.getLogger(__name__)

ExtractionResult = Union[DatabaseSchema, CollectionSchema]

class InspectionReport(BaseModel):
    health: ConnectionHealth
    result: Optional[Union[DatabaseSchema, CollectionSchema]] = None

class InspectorFacade:
    """
    Facade Pattern: Unified entry point for connectivity checks and extraction.
    The connector is owned by the caller (opened and closed around the facade).
    """
    def __init__(self, connector: Union[CatalogConnector, DocumentConnector]):
        self.connector = connector
        self._checker = ConnectionChecker(connector)

    def extract(self, config: DatabaseConfig) -> ExtractionResult:
        """
        Extracts the whole schema and returns it; nothing is written here.
        Relational and document backends take separate paths.
        """
        if config.db_type is BackendKind.MONGODB:
            collections = CollectionCrawler(self.connector).extract_all(config.database)
            return assemble_collection_schema(config.database, collections)

        default_schema = config.resolved_schema
        crawler = SchemaCrawler(self.connector, get_dialect(config.db_type))
        logger.info(f"Extracting {config.db_type.value} schema '{default_schema}' of {config.database}")
        tables = crawler.extract_all(default_schema)
        return assemble_database_schema(config.database, config.db_type, default_schema, tables)

    def run_diagnostics(self, config: Optional[DatabaseConfig] = None) -> InspectionReport:
        # 1. Check connection first (Fail Fast)
        health = self._checker.check_health()
        if health.status != "success" or config is None:
            return InspectionReport(health=health)

        # 2. Extract only if connection is successful
        return InspectionReport(health=health, result=self.extract(config))

__all__ = ["InspectorFacade", "InspectionReport", "ExtractionResult"]
