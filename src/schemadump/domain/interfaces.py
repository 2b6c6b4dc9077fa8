from typing import List, Protocol, Sequence, Any
from .models import CatalogQuery, ConnectionHealth

class CatalogConnector(Protocol):
    """Relational backend: one live connection that runs catalog queries."""

    def connect(self) -> None: ...

    def close(self) -> None: ...

    def check_health(self) -> ConnectionHealth: ...

    def execute(self, query: CatalogQuery) -> List[Sequence[Any]]: ...

class DocumentConnector(Protocol):
    """Document backend: lists the collections of one database."""

    def connect(self) -> None: ...

    def close(self) -> None: ...

    def check_health(self) -> ConnectionHealth: ...

    def list_collection_names(self, database: str) -> List[str]: ...
