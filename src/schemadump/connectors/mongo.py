import logging
import time
from typing import List, Optional
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from ..domain.models import ConnectionHealth, HealthStatus
from ..exceptions import ConnectionError, QueryExecutionError

logger = logging.getLogger(__name__)

class MongoConnector:
    """
    MongoDB implementation of the document connector.
    One MongoClient per run, pinged on connect().
    """
    def __init__(self, uri: str, db_alias: str = "unknown", **client_kwargs):
        self.uri = uri
        self.db_alias = db_alias
        self.client_kwargs = client_kwargs
        self._client: Optional[MongoClient] = None

    def connect(self) -> None:
        if self._client is not None:
            return
        try:
            self._client = MongoClient(self.uri, **self.client_kwargs)
            self._client.admin.command("ping")
        except PyMongoError as e:
            self.close()
            raise ConnectionError(f"Failed to connect to {self.db_alias}: {e}") from e
        logger.debug(f"Connected to {self.db_alias}")

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "MongoConnector":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def check_health(self) -> ConnectionHealth:
        start_time = time.time()
        status = HealthStatus.FAILED
        error_msg = None

        try:
            self.connect()
            self._client.admin.command("ping")
            status = HealthStatus.SUCCESS
        except (ConnectionError, PyMongoError) as e:
            error_msg = str(e)

        latency = (time.time() - start_time) * 1000  # ms
        if latency > 5000 and status == HealthStatus.SUCCESS:
            status = HealthStatus.TIMEOUT

        return ConnectionHealth(
            db_alias=self.db_alias,
            status=status,
            latency_ms=round(latency, 2),
            error_message=error_msg
        )

    def list_collection_names(self, database: str) -> List[str]:
        self.connect()
        try:
            return list(self._client[database].list_collection_names())
        except PyMongoError as e:
            raise QueryExecutionError("listing collections", e) from e
