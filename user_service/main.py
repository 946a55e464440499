import logging

from fastapi import FastAPI

from user_service.core import config
from user_service.core.responses import install_exception_handlers
from user_service.database import Database
from user_service.routes import health_routes, user_routes

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    app = FastAPI(title='User Service API')
    app.state.database = database or Database(config.DATABASE_URL, echo=config.SQL_ECHO)

    install_exception_handlers(app)

    @app.on_event('startup')
    def initialize_database() -> None:
        try:
            config.validate_runtime_config()
            app.state.database.connect()
        except RuntimeError:
            logger.exception('Startup failed: invalid configuration or unreachable database; refusing to serve.')
            raise

    @app.on_event('shutdown')
    def close_database() -> None:
        app.state.database.close()

    app.include_router(health_routes.router)
    app.include_router(user_routes.router)

    return app


app = create_app()
