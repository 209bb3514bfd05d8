from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.middleware.logging_md import LoggingMiddleware
from framework.logging.logger import LogConfig
from framework.exceptions.handler import BusinessException, global_exception_handler
from framework.repository.unit_of_work import UnitOfWork
from apps.identity.api.router import router as auth_router, users_router
from apps.identity.bootstrap import bootstrap_admin
from apps.orders.api.router import router as order_router
from apps.tasks.api.router import router as task_router
from apps.workspace.api.router import router as workspace_router

@asynccontextmanager
async def lifespan(_: FastAPI):
    """Create the schema and seed the admin account before serving."""
    manager = DatabaseManager.get_instance()
    await manager.sql.connect()
    await manager.sql.create_all()
    async for session in manager.sql.get_session():
        await bootstrap_admin(UnitOfWork(session=session))
    logger.info(f"{settings.APP_NAME} started ({settings.APP_ENV})")
    try:
        yield
    finally:
        await manager.sql.disconnect()
        DatabaseManager.reset_instance()

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Initialize logging configuration
LogConfig.setup_logging()

# Register global exception handlers
app.add_exception_handler(BusinessException, global_exception_handler)
app.add_exception_handler(RequestValidationError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(LoggingMiddleware)

# Mount routers (prefixes from config)
app.include_router(auth_router, prefix=settings.API_AUTH_PREFIX, tags=["Auth"])
app.include_router(users_router, prefix=f"{settings.API_PREFIX}/users", tags=["Users"])
app.include_router(order_router, prefix=settings.API_PREFIX, tags=["Orders"])
app.include_router(task_router, prefix=settings.API_PREFIX, tags=["Tasks"])
app.include_router(workspace_router, prefix=settings.API_PREFIX, tags=["Workspace"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
