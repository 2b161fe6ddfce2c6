import logging
import sys

import uvicorn

from .app import create_app
from .config import Settings
from .db import init_schema, make_engine
from .errors import SchemaError
from .logging_setup import setup_logging
from .repository import TaskRepository

logger = logging.getLogger(__name__)


def main() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    engine = make_engine(settings.database_url)
    try:
        init_schema(engine)
    except SchemaError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    app = create_app(TaskRepository(engine))
    logger.info("Serving tasks from %s on port %s", settings.database_url, settings.port)
    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
