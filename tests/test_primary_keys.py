import pytest
from conftest import query_failure
from schemadump.dialects.primary_keys import PrimaryKeyResolver, PrimaryKeyStrategy, merge_primary_keys
from schemadump.dialects.sybase import PRIMARY_KEY_STRATEGIES
from schemadump.domain.models import CatalogQuery, Column, PrimaryKeyResolution
from schemadump.exceptions import RowDecodeError

def _resolver():
    return PrimaryKeyResolver(PRIMARY_KEY_STRATEGIES)

def test_primary_strategy_wins(catalog):
    connector = catalog([("sysindexes", [("A",), ("B",)])])

    resolution = _resolver().resolve(connector, "dbo", "orders")

    assert resolution.columns == frozenset({"A", "B"})
    assert resolution.strategy == "sysindexes"
    assert resolution.resolved
    assert len(connector.queries) == 1

def test_fallback_used_when_primary_query_fails(catalog):
    connector = catalog([
        ("sysindexes", query_failure("Invalid column name 'status'")),
        ("syskeys", [("order_id",)]),
    ])

    resolution = _resolver().resolve(connector, "dbo", "orders")

    assert resolution.columns == frozenset({"order_id"})
    assert resolution.strategy == "syskeys"
    assert len(connector.queries) == 2

def test_empty_primary_answer_does_not_trigger_fallback(catalog):
    connector = catalog([
        ("sysindexes", []),
        ("syskeys", [("should_not_be_used",)]),
    ])

    resolution = _resolver().resolve(connector, "dbo", "heap_table")

    assert resolution.columns == frozenset()
    assert resolution.strategy == "sysindexes"
    assert resolution.resolved
    assert len(connector.queries) == 1

def test_all_strategies_failing_degrades_to_unresolved(catalog, caplog):
    connector = catalog([
        ("sysindexes", query_failure()),
        ("syskeys", query_failure()),
    ])

    resolution = _resolver().resolve(connector, "dbo", "orders")

    assert resolution.columns == frozenset()
    assert resolution.strategy is None
    assert not resolution.resolved
    assert "Could not determine primary key of dbo.orders" in caplog.text

def test_malformed_primary_key_row_is_fatal(catalog):
    connector = catalog([("sysindexes", [(None,)])])
    with pytest.raises(RowDecodeError):
        _resolver().resolve(connector, "dbo", "orders")

def test_strategies_run_in_declared_order(catalog):
    calls = []

    def strategy(name):
        def build(schema, table):
            calls.append(name)
            return CatalogQuery(sql=f"SELECT {name}", literal=True)
        return PrimaryKeyStrategy(name, build)

    connector = catalog([
        ("first", query_failure()),
        ("second", query_failure()),
        ("third", [("id",)]),
    ])
    resolver = PrimaryKeyResolver([strategy("first"), strategy("second"), strategy("third")])

    assert resolver.resolve(connector, "dbo", "t").strategy == "third"
    assert calls == ["first", "second", "third"]

def test_resolver_needs_strategies():
    with pytest.raises(ValueError):
        PrimaryKeyResolver([])

def test_merge_marks_exactly_resolved_columns():
    columns = [
        Column(column_name="A", data_type="int", is_nullable="NO"),
        Column(column_name="B", data_type="int", is_nullable="NO"),
        Column(column_name="C", data_type="varchar", is_nullable="YES", max_length=10, is_primary_key=True),
    ]
    resolution = PrimaryKeyResolution(table_name="t", columns=frozenset({"A", "B", "GHOST"}), strategy="sysindexes")

    merged = merge_primary_keys(columns, resolution)

    assert [c.is_primary_key for c in merged] == [True, True, False]
    assert [c.column_name for c in merged] == ["A", "B", "C"]
    assert merged[2].max_length == 10
    # originals untouched
    assert columns[0].is_primary_key is False
