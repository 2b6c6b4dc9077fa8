import logging
import time
from typing import Any, List, Optional, Sequence
from sqlalchemy import create_engine, text, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from ..domain.models import CatalogQuery, ConnectionHealth, HealthStatus
from ..exceptions import ConnectionError, QueryExecutionError

logger = logging.getLogger(__name__)

class SQLAlchemyConnector:
    """
    Catalog connector over a single SQLAlchemy connection.
    The connection is opened and pinged once by connect() and reused for
    every catalog query until close().
    """
    def __init__(self, url: Any, db_alias: str = "unknown", **engine_kwargs: Any):
        self.url = url
        self.db_alias = db_alias
        self.engine_kwargs = engine_kwargs
        self._engine: Optional[Engine] = None
        self._connection: Optional[Connection] = None

    @staticmethod
    def _enforce_read_only_listener(conn, cursor, statement, parameters, context, executemany):
        """
        Event Hook (Interceptor).
        Blocks any SQL that doesn't start with a whitelist keyword.
        """
        sql = statement.strip().upper()

        allowed_starts = (
            "SELECT",
            "WITH",
            "EXPLAIN",
            "DESCRIBE",
            "SHOW",
            "SET",          # Needed for session configuration
        )

        if not any(sql.startswith(keyword) for keyword in allowed_starts):
            raise PermissionError(
                f"SAFETY BLOCK: Operation blocked! Only read-only queries are allowed. "
                f"Attempted: {sql[:50]}..."
            )

    @staticmethod
    def _set_readonly_session_listener(connection):
        """
        Puts the session in READ ONLY mode right after connecting,
        for the dialects that support it.
        """
        dialect = connection.dialect.name.lower()
        try:
            if dialect == "postgresql":
                connection.exec_driver_sql("SET SESSION CHARACTERISTICS AS TRANSACTION READ ONLY")
            elif dialect == "mysql":
                connection.exec_driver_sql("SET SESSION TRANSACTION READ ONLY")
        except SQLAlchemyError as e:
            # The interceptor above is the primary guard
            logger.warning(f"Could not set READ ONLY session on {dialect}: {e}")

    def _create_engine(self) -> Engine:
        return create_engine(self.url, **self.engine_kwargs)

    def connect(self) -> None:
        if self._connection is not None:
            return
        try:
            if not self._engine:
                self._engine = self._create_engine()
                event.listen(self._engine, "before_cursor_execute", self._enforce_read_only_listener)
                event.listen(self._engine, "engine_connect", self._set_readonly_session_listener)

            self._connection = self._engine.connect()
            self._connection.exec_driver_sql("SELECT 1")
        except (SQLAlchemyError, ImportError) as e:
            self.close()
            raise ConnectionError(f"Failed to connect to {self.db_alias}: {e}") from e
        logger.debug(f"Connected to {self.db_alias}")

    def close(self) -> None:
        if self._connection is not None:
            try:
                self._connection.close()
            except SQLAlchemyError as e:
                logger.warning(f"Error while closing connection to {self.db_alias}: {e}")
            self._connection = None
        if self._engine:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> "SQLAlchemyConnector":
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
            self._connection.exec_driver_sql("SELECT 1")
            status = HealthStatus.SUCCESS
        except (ConnectionError, SQLAlchemyError) as e:
            error_msg = str(e)
            status = HealthStatus.FAILED

        latency = (time.time() - start_time) * 1000  # ms

        if latency > 5000 and status == HealthStatus.SUCCESS:
            # Driver timeouts still apply; this only flags slow round-trips.
            status = HealthStatus.TIMEOUT

        return ConnectionHealth(
            db_alias=self.db_alias,
            status=status,
            latency_ms=round(latency, 2),
            error_message=error_msg
        )

    def execute(self, query: CatalogQuery) -> List[Sequence[Any]]:
        """
        Runs one catalog query and returns all rows as tuples.
        Literal queries skip bind processing entirely.
        """
        self.connect()
        try:
            if query.literal:
                result = self._connection.exec_driver_sql(query.sql)
            else:
                result = self._connection.execute(text(query.sql), query.params)
            return [tuple(row) for row in result]
        except SQLAlchemyError as e:
            # Leave the connection usable for the next query
            try:
                self._connection.rollback()
            except SQLAlchemyError:
                logger.debug("Rollback after failed catalog query also failed", exc_info=True)
            raise QueryExecutionError("catalog query", e) from e
