from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cycling_photos.api.errors import register_error_handling
from cycling_photos.api.v1.api import api_router
from cycling_photos.core.config import Settings, get_settings
from cycling_photos.core.logging import configure_logging
from cycling_photos.db.base import Base
from cycling_photos.db.session import engine
from cycling_photos.models import classification, event, photo  # noqa: F401


def create_app(settings: Settings | None = None) -> FastAPI:
	settings = settings or get_settings()
	configure_logging(settings)

	app = FastAPI(title=settings.PROJECT_NAME)
	app.state.settings = settings
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.CORS_ORIGINS,
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
		expose_headers=["X-Request-Id"],
	)
	register_error_handling(app)

	app.include_router(api_router, prefix=settings.API_V1_STR)

	@app.on_event("startup")
	async def on_startup() -> None:
		async with engine.begin() as conn:
			await conn.run_sync(Base.metadata.create_all)

	@app.get("/health")
	async def health_check():
		return {"status": "ok"}

	return app


app = create_app()
