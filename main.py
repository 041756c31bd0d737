from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from services.advocate_directory.api.advocates_router import router as advocates_router
from shared.config import Settings, get_settings
from shared.db import Database, create_database
from shared.errors import register_error_handlers
from shared.logger import configure_logging, get_logger

logger = get_logger(component="app")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the API. When ``database`` is given it is used as-is and left open
    on shutdown; otherwise one is created from settings in the lifespan.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_database = app.state.database is None
        if owns_database:
            app.state.database = create_database(settings)
        logger.info("Advocate directory starting", database_connected=app.state.database is not None)
        try:
            yield
        finally:
            if owns_database and app.state.database is not None:
                await app.state.database.dispose()
                app.state.database = None

    app = FastAPI(title="Advocate Directory", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/")
    def health_check():
        return {"status": "Advocate Directory is running"}

    app.include_router(advocates_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
