class SchemaDumpException(Exception):
    """Base Exception Class"""
    pass

class ConnectionError(SchemaDumpException):
    """Connection Failure (cannot connect / cannot ping)"""
    pass

class ConfigurationError(SchemaDumpException):
    """Configuration Error"""
    pass

class ExtractionError(SchemaDumpException):
    """
    Fatal error raised while reading the catalog.
    Carries the operation that failed and the underlying cause.
    """
    def __init__(self, operation: str, cause: object):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {cause}")

class QueryExecutionError(ExtractionError):
    """Catalog query could not be executed (missing view, permission denied, ...)"""
    pass

class RowDecodeError(ExtractionError):
    """Catalog row does not have the expected shape"""
    pass

class UnsafeIdentifierError(ExtractionError):
    """Identifier cannot be embedded safely in a literal query"""
    pass

class OutputError(SchemaDumpException):
    """Output serialization or write failure"""
    pass
