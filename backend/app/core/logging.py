import logging

from app.core.config import settings


LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT)
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)
