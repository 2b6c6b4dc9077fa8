from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchModuleError
from .base import SQLAlchemyConnector
from ..exceptions import ConnectionError

class SybaseConnector(SQLAlchemyConnector):
    """
    Sybase ASE implementation.
    The dialect is provided by the sqlalchemy-sybase package and talks to
    the server through pyodbc + FreeTDS.
    """
    def _create_engine(self) -> Engine:
        try:
            return create_engine(self.url, **self.engine_kwargs)
        except NoSuchModuleError as e:
            raise ConnectionError(
                "Sybase dialect is not installed. Please install it with `pip install '.[sybase]'`"
            ) from e
