from enum import Enum
from typing import List, Optional, Any, Dict, FrozenSet
from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

class BackendKind(str, Enum):
    SQLSERVER = "sqlserver"
    SYBASE = "sybase"
    MYSQL = "mysql"
    POSTGRES = "postgres"
    MONGODB = "mongodb"

    @property
    def is_relational(self) -> bool:
        return self is not BackendKind.MONGODB

class HealthStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"

class ConnectionHealth(BaseModel):
    db_alias: str
    status: HealthStatus
    latency_ms: Optional[float] = None
    error_message: Optional[str] = None

class CatalogQuery(BaseModel):
    """
    One catalog query ready to run.
    `literal` queries already embed their values and are sent to the
    driver as-is, everything else goes through native parameter binding.
    """
    model_config = ConfigDict(frozen=True)

    sql: str
    params: Dict[str, Any] = Field(default_factory=dict)
    literal: bool = False

class SchemaModel(BaseModel):
    """Base for the persisted output records (camelCase JSON, immutable)."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

class Column(SchemaModel):
    column_name: str
    data_type: str
    is_nullable: str  # "YES" / "NO"
    max_length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    is_primary_key: bool = False
    is_identity: bool = False
    default_value: str = ""

    @model_serializer(mode="wrap")
    def _omit_empty_default(self, handler):
        data = handler(self)
        # An empty default means "no default"; it is not written out.
        for key in ("defaultValue", "default_value"):
            if data.get(key) == "":
                del data[key]
        return data

class Table(SchemaModel):
    table_name: str
    schema_name: str = Field(alias="schema")
    columns: List[Column] = Field(default_factory=list)

class DatabaseSchema(SchemaModel):
    database_name: str
    db_type: BackendKind
    default_schema: str
    tables: List[Table] = Field(default_factory=list)

class MongoIndexKey(SchemaModel):
    field: str
    direction: int

class MongoIndex(SchemaModel):
    name: str
    keys: List[MongoIndexKey] = Field(default_factory=list)
    unique: bool = False

class Collection(SchemaModel):
    collection_name: str
    database_name: str
    indexes: List[MongoIndex] = Field(default_factory=list)
    sample_document: Optional[Dict[str, Any]] = None

    @model_serializer(mode="wrap")
    def _omit_empty_indexes(self, handler):
        data = handler(self)
        if data.get("indexes") == []:
            del data["indexes"]
        return data

class CollectionSchema(SchemaModel):
    database_name: str
    db_type: BackendKind = BackendKind.MONGODB
    collections: List[Collection] = Field(default_factory=list)

class PrimaryKeyResolution(BaseModel):
    """
    Outcome of the primary-key strategy chain for one table.
    `strategy` names the strategy that answered; None means every
    strategy failed to execute and nothing is known about the keys.
    """
    model_config = ConfigDict(frozen=True)

    table_name: str
    columns: FrozenSet[str] = frozenset()
    strategy: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.strategy is not None
