from typing import Union
from ..domain.interfaces import CatalogConnector, DocumentConnector
from ..domain.models import ConnectionHealth

class ConnectionChecker:
    """
    SRP: Responsible only for connectivity checks.
    """
    def __init__(self, connector: Union[CatalogConnector, DocumentConnector]):
        self.connector = connector

    def check_health(self) -> ConnectionHealth:
        return self.connector.check_health()
