import logging
from typing import List
from ..domain.interfaces import DocumentConnector
from ..domain.models import Collection
from ..exceptions import ExtractionError

logger = logging.getLogger(__name__)

class CollectionCrawler:
    """
    SRP: Responsible only for document-store crawling.
    """
    def __init__(self, connector: DocumentConnector):
        self.connector = connector

    def extract_all(self, database: str) -> List[Collection]:
        """One Collection per name, in listing order."""
        try:
            names = self.connector.list_collection_names(database)
        except ExtractionError as e:
            raise type(e)(f"listing collections of {database}", e.cause) from e

        collections = []
        for name in names:
            logger.info(f"Processed collection {name}")
            # Index and sample-document extraction are not implemented; both stay empty.
            collections.append(Collection(collection_name=name, database_name=database))
        return collections
