from typing import Callable, List
import pytest
from schemadump.domain.models import CatalogQuery, ConnectionHealth, HealthStatus
from schemadump.exceptions import QueryExecutionError

class FakeCatalogConnector:
    """
    Scripted catalog: each rule is (substring, rows or exception).
    The first rule whose substring appears in the SQL answers the query.
    """
    def __init__(self, rules):
        self.rules = list(rules)
        self.queries: List[CatalogQuery] = []
        self.closed = False

    def connect(self):
        pass

    def close(self):
        self.closed = True

    def check_health(self):
        return ConnectionHealth(db_alias="fake", status=HealthStatus.SUCCESS, latency_ms=0.1)

    def execute(self, query: CatalogQuery):
        self.queries.append(query)
        for needle, answer in self.rules:
            if needle in query.sql:
                if isinstance(answer, Exception):
                    raise answer
                if callable(answer):
                    return answer(query)
                return list(answer)
        raise AssertionError(f"Unexpected catalog query: {query.sql}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

class FakeDocumentConnector:
    def __init__(self, names):
        # a list of names, or an exception to raise when listing
        self.names = names
        self.closed = False

    def connect(self):
        pass

    def close(self):
        self.closed = True

    def check_health(self):
        return ConnectionHealth(db_alias="fake-mongo", status=HealthStatus.SUCCESS, latency_ms=0.1)

    def list_collection_names(self, database):
        if isinstance(self.names, Exception):
            raise self.names
        return list(self.names)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

def query_failure(message: str = "relation does not exist") -> QueryExecutionError:
    return QueryExecutionError("catalog query", message)

@pytest.fixture
def catalog() -> Callable[..., FakeCatalogConnector]:
    return FakeCatalogConnector

@pytest.fixture
def documents() -> Callable[..., FakeDocumentConnector]:
    return FakeDocumentConnector
