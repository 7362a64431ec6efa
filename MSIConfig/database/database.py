from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine, URL
from sqlalchemy.orm import Session, sessionmaker

from MSIConfig.config.database_config import DatabaseConfig
from MSIConfig.config.logger_config import get_logger

logger = get_logger(__name__)

DRIVER = "postgresql+psycopg2"


class Database:
    def __init__(self, db_config: DatabaseConfig, engine: Optional[Engine] = None):
        """
        Pooled PostgreSQL client.

        Connections are taken from the pool for the duration of a `connect()` or
        `session()` block and returned afterwards. The pool holds at most
        `pool_size` connections, further callers wait for a connection to be returned.
        """
        self.config = db_config
        self.engine = engine if engine is not None else create_db_engine(db_config)
        self._session_factory = sessionmaker(bind=self.engine, autoflush=False)

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        with self.engine.connect() as connection:
            yield connection

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session committed on success, rolled back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.debug("Database connection pool disposed.")


def database_url(db_config: DatabaseConfig) -> URL:
    return URL.create(
        DRIVER,
        username=db_config.user,
        password=db_config.password or None,
        host=db_config.host,
        port=db_config.port,
        database=db_config.database,
    )


def create_db_engine(db_config: DatabaseConfig) -> Engine:
    """
    Build the engine. No connection is opened until the first query.
    """
    engine = create_engine(
        database_url(db_config),
        pool_size=db_config.pool_size,
        max_overflow=0,
        # connections older than the idle timeout are replaced on checkout
        pool_recycle=db_config.idle_timeout,
        pool_pre_ping=True,
        connect_args={"options": f"-csearch_path={','.join(db_config.schemas)}"},
    )
    logger.debug(
        f"Database engine for {db_config.user}@{db_config.host}:{db_config.port}/{db_config.database} "
        f"(pool size {db_config.pool_size}, idle timeout {db_config.idle_timeout}s)"
    )
    return engine
