from typing import Union
from urllib.parse import quote_plus
from sqlalchemy.engine import URL
from ..config import DatabaseConfig
from ..domain.interfaces import CatalogConnector, DocumentConnector
from ..domain.models import BackendKind
from .base import SQLAlchemyConnector
from .mongo import MongoConnector
from .postgres import PostgresConnector
from .sybase import SybaseConnector

DRIVER_NAMES = {
    BackendKind.SQLSERVER: "mssql+pymssql",
    BackendKind.SYBASE: "sybase+pyodbc",
    BackendKind.MYSQL: "mysql+pymysql",
    BackendKind.POSTGRES: "postgresql+psycopg2",
}

def build_url(config: DatabaseConfig) -> URL:
    """SQLAlchemy URL for a relational backend."""
    query = {}
    if config.db_type is BackendKind.SYBASE:
        # pyodbc over FreeTDS, TDS 5.0 is the Sybase protocol
        query = {"driver": "FreeTDS", "TDS_Version": "5.0"}
    elif config.db_type is BackendKind.MYSQL:
        query = {"charset": "utf8mb4"}

    return URL.create(
        DRIVER_NAMES[config.db_type],
        username=config.user,
        password=config.password,
        host=config.server,
        port=config.resolved_port,
        database=config.database,
        query=query,
    )

def build_mongo_uri(config: DatabaseConfig) -> str:
    return "mongodb://{user}:{password}@{host}:{port}/{database}".format(
        user=quote_plus(config.user),
        password=quote_plus(config.password),
        host=config.server,
        port=config.resolved_port,
        database=config.database,
    )

def get_connector(config: DatabaseConfig) -> Union[CatalogConnector, DocumentConnector]:
    """
    Factory function to create the appropriate connector instance.
    The connector is not connected yet; use it as a context manager.
    """
    alias = f"{config.db_type.value}://{config.server}:{config.resolved_port}/{config.database}"

    if config.db_type is BackendKind.MONGODB:
        return MongoConnector(build_mongo_uri(config), alias)

    url = build_url(config)
    if config.db_type is BackendKind.POSTGRES:
        return PostgresConnector(url, alias, sslmode=config.sslmode)
    elif config.db_type is BackendKind.SYBASE:
        return SybaseConnector(url, alias)
    else:
        return SQLAlchemyConnector(url, alias)
