import logging

from cycling_photos.core.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
	settings = settings or get_settings()
	logging.basicConfig(
		level=settings.LOG_LEVEL,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	if settings.DATABASE_ECHO:
		logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
