import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import settings
from api.routers.combine_images import router as combine_router


def create_app() -> FastAPI:
	logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT, datefmt=settings.LOG_DATEFMT)

	app = FastAPI(title="Photo Interleave API", version="0.1.0")

	# Origins come from COMBINER_CORS_ORIGINS (comma separated); uploads carry no cookies
	app.add_middleware(
		CORSMiddleware,
		allow_origins=list(settings.CORS_ORIGINS),
		allow_credentials=False,
		allow_methods=["GET", "POST"],
		allow_headers=["*"],
	)
	app.include_router(combine_router)
	logging.getLogger(__name__).debug("CORS origins: %s", settings.CORS_ORIGINS)
	return app


app = create_app()


def serve() -> None:
	import uvicorn

	uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
	serve()
