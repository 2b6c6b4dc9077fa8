from typing import List
from ..domain.models import BackendKind, Collection, CollectionSchema, DatabaseSchema, Table

def assemble_database_schema(
    database: str, kind: BackendKind, default_schema: str, tables: List[Table]
) -> DatabaseSchema:
    return DatabaseSchema(
        database_name=database,
        db_type=kind,
        default_schema=default_schema,
        tables=list(tables),
    )

def assemble_collection_schema(database: str, collections: List[Collection]) -> CollectionSchema:
    return CollectionSchema(
        database_name=database,
        db_type=BackendKind.MONGODB,
        collections=list(collections),
    )
