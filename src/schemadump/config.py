from typing import Any, Dict, Optional
from pathlib import Path
import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from .domain.models import BackendKind
from .exceptions import ConfigurationError

DEFAULT_PORTS = {
    BackendKind.SQLSERVER: 1433,
    BackendKind.SYBASE: 5000,
    BackendKind.MYSQL: 3306,
    BackendKind.POSTGRES: 5432,
    BackendKind.MONGODB: 27017,
}

DEFAULT_SCHEMAS = {
    BackendKind.SQLSERVER: "dbo",
    BackendKind.SYBASE: "dbo",
    BackendKind.POSTGRES: "public",
}

YAML_KEY_ALIASES = {
    "dbtype": "db_type",
    "schema": "default_schema",
}

class DatabaseConfig(BaseSettings):
    """
    Connection and extraction settings for one run.
    Values come from CLI options, a YAML file and SCHEMADUMP_* env vars.
    """
    model_config = SettingsConfigDict(env_prefix="SCHEMADUMP_", extra="ignore")

    db_type: BackendKind
    server: str = "localhost"
    port: Optional[int] = None
    user: str
    password: str
    database: str
    default_schema: Optional[str] = None
    output: Path = Path("database_schema.json")
    sslmode: str = "disable"  # PostgreSQL only

    @field_validator("db_type", mode="before")
    @classmethod
    def _normalize_db_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("user", "password", "database")
    @classmethod
    def _required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def resolved_port(self) -> int:
        return self.port or DEFAULT_PORTS[self.db_type]

    @property
    def resolved_schema(self) -> str:
        if self.default_schema:
            return self.default_schema
        if self.db_type is BackendKind.MYSQL:
            # MySQL has no schema level below the database
            return self.database
        return DEFAULT_SCHEMAS.get(self.db_type, "")

    @classmethod
    def load(cls, config_path: Optional[Path] = None, **overrides: Any) -> "DatabaseConfig":
        """
        Build the config from an optional YAML file; non-None overrides
        (usually CLI options) take precedence over the file.
        """
        raw_config: Dict[str, Any] = {}
        if config_path is not None:
            raw_config = cls._read_yaml(config_path)

        raw_config.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**raw_config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    @staticmethod
    def _read_yaml(config_path: Path) -> Dict[str, Any]:
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid configuration format: {e}")

        if not isinstance(raw_config, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {config_path}")
        # Config files may use the CLI option names
        for option, field in YAML_KEY_ALIASES.items():
            if option in raw_config and field not in raw_config:
                raw_config[field] = raw_config.pop(option)
        return raw_config
