#Fastapi/Asyncio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

#Project files
from payback.common.config import Config
import payback.infrastructure.telemetry.logs as logs
import payback.infrastructure.telemetry as telemetry
import payback.infrastructure.telemetry.metrics as metrics
import payback.infrastructure.dependencies as ideps
import payback.presentation.routers as routers
from payback.presentation.exception_handlers import register_exception_handlers

#Misc
import opentelemetry.instrumentation.sqlalchemy as otel_sqla

#Logging
import logging
import loguru # type: ignore
import uvicorn





###################
#       App       #
###################

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f'[APP: Startup] Startup began...')
    database_manager: ideps.DatabaseManagerType = app.state.database_manager

    await database_manager.wait_for_startup(attempts=Config.DB_WAIT_MAX_RETRIES, interval_sec=Config.DB_WAIT_INTERVAL_SECONDS)
    await database_manager.initialize_data_structures()

    logger.info(f'[APP: Startup] Startup finished!')
    yield
    await database_manager.close()



logs.init_loggers()
logger = logging.getLogger('app')


def create_app(database_manager: ideps.DatabaseManagerType | None = None) -> FastAPI:
    """Composition root. Owns the storage engine, hasher and token issuer for the process lifetime."""
    app = FastAPI(
        title = f'{Config.APP_NAME} commit {Config.GIT_COMMIT}',
        swagger_ui_parameters={
            "defaultModelsExpandDepth": -1,
            "docExpansion": None,
            "displayRequestDuration":True
        },
        lifespan=lifespan,
    )

    app.state.database_manager = database_manager or ideps.build_database_manager()
    app.state.password_hasher = ideps.PasswordHasherType()
    app.state.token_issuer = ideps.TokenIssuerType()
    app.state.dummy_password_hash = ideps.build_dummy_password_hash()

    if Config.OTEL_ENABLED:
        telemetry.setup_opentelemetry(app)
        otel_sqla.SQLAlchemyInstrumentor().instrument(engine=app.state.database_manager.engine.sync_engine)

    app.include_router(routers.AuthRouter)
    app.include_router(routers.UserRouter)
    register_exception_handlers(app)
    metrics.register_middlewares(app)
    app.middleware("http")(catch_unhandled_middleware)

    @app.get("/")
    @app.get("/health",include_in_schema=False)
    async def read_root():
        """Indicates if the server is alive"""
        return {"status": "ok"}

    return app


async def catch_unhandled_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        loguru.logger.exception(e)
        return JSONResponse(
            status_code=500,
            content={'message':'Unhandled error'}
        )


app = create_app()


def run():
    """Console entry point. The access log is off, the metrics middleware covers requests"""
    uvicorn.run(
        "payback.main:app",
        host=Config.HOST,
        port=Config.PORT,
        workers=Config.WORKERS,
        access_log=False,
    )
