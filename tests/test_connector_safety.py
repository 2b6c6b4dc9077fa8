import pytest
from schemadump.connectors.base import SQLAlchemyConnector
from schemadump.domain.models import CatalogQuery, HealthStatus
from schemadump.exceptions import ConnectionError, QueryExecutionError

# Mocking the connector to use SQLite for testing safety mechanisms
class TestSafetyConnector(SQLAlchemyConnector):
    __test__ = False

    def __init__(self):
        # Use in-memory SQLite for fast testing
        super().__init__("sqlite:///:memory:", "test_db")

def test_read_only_listener_allows_select():
    """Test that SELECT statements are allowed."""
    with TestSafetyConnector() as connector:
        try:
            rows = connector.execute(CatalogQuery(sql="SELECT 1"))
        except PermissionError:
            pytest.fail("Valid SELECT statement was blocked.")
    assert rows == [(1,)]

def test_bound_parameters_are_passed_to_driver():
    with TestSafetyConnector() as connector:
        rows = connector.execute(CatalogQuery(sql="SELECT :schema, :table", params={"schema": "main", "table": "t"}))
    assert rows == [("main", "t")]

def test_literal_query_is_sent_as_is():
    with TestSafetyConnector() as connector:
        rows = connector.execute(CatalogQuery(sql="SELECT 'a:b'", literal=True))
    assert rows == [("a:b",)]

def test_read_only_listener_blocks_create():
    """Test that CREATE TABLE statements are blocked."""
    with TestSafetyConnector() as connector:
        with pytest.raises(PermissionError) as excinfo:
            connector.execute(CatalogQuery(sql="CREATE TABLE test (id int)"))

    assert "SAFETY BLOCK" in str(excinfo.value)

def test_read_only_listener_blocks_drop():
    """Test that DROP TABLE statements are blocked."""
    with TestSafetyConnector() as connector:
        with pytest.raises(PermissionError) as excinfo:
            connector.execute(CatalogQuery(sql="DROP TABLE users", literal=True))

    assert "SAFETY BLOCK" in str(excinfo.value)

def test_read_only_listener_blocks_insert():
    """Test that INSERT statements are blocked."""
    with TestSafetyConnector() as connector:
        with pytest.raises(PermissionError):
            connector.execute(CatalogQuery(sql="INSERT INTO users VALUES (1)"))

def test_read_only_listener_allows_with_cte():
    """Test that WITH (CTE) statements are allowed."""
    with TestSafetyConnector() as connector:
        rows = connector.execute(CatalogQuery(sql="WITH t AS (SELECT 1 as a) SELECT a FROM t"))
    assert rows == [(1,)]

def test_failed_query_raises_and_connection_stays_usable():
    with TestSafetyConnector() as connector:
        with pytest.raises(QueryExecutionError) as excinfo:
            connector.execute(CatalogQuery(sql="SELECT * FROM sysobjects"))
        assert excinfo.value.operation == "catalog query"

        assert connector.execute(CatalogQuery(sql="SELECT 2")) == [(2,)]

def test_connection_is_released_on_exit():
    connector = TestSafetyConnector()
    with connector:
        assert connector._connection is not None
    assert connector._connection is None
    assert connector._engine is None

def test_health_check_reports_success():
    connector = TestSafetyConnector()
    try:
        health = connector.check_health()
    finally:
        connector.close()
    assert health.status == HealthStatus.SUCCESS
    assert health.db_alias == "test_db"
    assert health.latency_ms is not None

def test_unknown_dialect_is_a_connection_error():
    connector = SQLAlchemyConnector("nosuchdb://user@host/db", "broken")
    with pytest.raises(ConnectionError):
        connector.connect()

def test_unreachable_database_health_is_failed(tmp_path):
    missing = tmp_path / "missing" / "db.sqlite"
    connector = SQLAlchemyConnector(f"sqlite:///{missing}", "missing")
    health = connector.check_health()
    assert health.status == HealthStatus.FAILED
    assert health.error_message
