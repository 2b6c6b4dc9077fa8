from typing import Any
from .base import SQLAlchemyConnector

class PostgresConnector(SQLAlchemyConnector):
    """
    PostgreSQL specific implementation.
    Inherits from Generic SQLAlchemy connector; only adds the TLS mode.
    """
    def __init__(self, url: Any, db_alias: str = "unknown", sslmode: str = "disable"):
        super().__init__(url, db_alias, connect_args={"sslmode": sslmode})
