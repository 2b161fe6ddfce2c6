import logging

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.exc import SQLAlchemyError

from .errors import SchemaError
from .models import Base

logger = logging.getLogger(__name__)

MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def make_engine(url: str) -> Engine:
    if not url.startswith("sqlite"):
        return create_engine(url)
    # Sync handlers run on a thread pool, so the connection crosses threads.
    connect_args = {"check_same_thread": False}
    if url in MEMORY_URLS:
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, connect_args=connect_args)


def init_schema(engine: Engine) -> None:
    """Create the tasks table if it does not exist yet."""
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as exc:
        raise SchemaError(f"Table creation failed: {exc}") from exc
    logger.debug("Schema ready on %s", engine.url)
