from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager
import logging

from pos_terminal.config import Settings, get_settings
from pos_terminal.database import Base, create_db_engine, create_session_factory
from pos_terminal.models import product, sale  # noqa: F401  (register tables)
from pos_terminal.services.product_service import ProductService
from pos_terminal.utils.printer import EscposNetworkDriver, PrinterDriver
from pos_terminal.api import products, sales, printer, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    The application owns the database engine for its whole lifetime;
    request handlers get sessions from ``app.state.session_factory``.
    """
    settings = app.state.settings

    # Startup
    logger.info("Starting up application...")
    engine = create_db_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

    if settings.SEED_CATALOG:
        db = app.state.session_factory()
        try:
            ProductService(db).seed_if_empty()
        finally:
            db.close()

    yield

    # Shutdown
    logger.info("Shutting down application...")
    engine.dispose()


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error"}
    )


def root(request: Request):
    """Root endpoint with API information."""
    settings = request.app.state.settings
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/api/health/"
    }


def create_app(settings: Settings = None, printer_driver: PrinterDriver = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to run with (defaults to environment settings)
        printer_driver: Driver used to reach the receipt printer
            (defaults to a network ESC/POS driver)
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="""
        Point-of-sale backend:

        - **Catalog**: products with price, stock and barcode
        - **Checkout**: atomic sale commit with stock decrement
        - **History**: sales list and sale detail
        - **Printing**: receipts and cash drawer on a network ESC/POS printer
        """,
        version=settings.VERSION,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.printer_driver = printer_driver or EscposNetworkDriver(
        port=settings.PRINTER_PORT,
        timeout=settings.PRINTER_TIMEOUT
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    app.include_router(health.router, prefix="/api")
    app.include_router(products.router, prefix="/api")
    app.include_router(sales.router, prefix="/api")
    app.include_router(printer.router, prefix="/api")

    # Serve the built till UI when configured, API info otherwise
    if settings.STATIC_DIR:
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="ui")
    else:
        app.add_api_route("/", root, methods=["GET"], tags=["Root"])

    return app


app = create_app()
