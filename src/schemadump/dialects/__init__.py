from ..domain.models import BackendKind
from .base import Dialect
from .mysql import MySqlDialect
from .postgres import PostgresDialect
from .sqlserver import SqlServerDialect
from .sybase import SybaseDialect

_DIALECTS = {
    BackendKind.SQLSERVER: SqlServerDialect,
    BackendKind.SYBASE: SybaseDialect,
    BackendKind.MYSQL: MySqlDialect,
    BackendKind.POSTGRES: PostgresDialect,
}

def get_dialect(kind: BackendKind) -> Dialect:
    """Dialect implementation for a relational backend kind."""
    try:
        return _DIALECTS[BackendKind(kind)]()
    except KeyError:
        raise ValueError(f"No relational dialect for backend kind '{kind}'")

__all__ = ["Dialect", "get_dialect"]
