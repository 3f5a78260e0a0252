"""
FastAPI application factory for the Finance Dashboard.

DESIGN DECISION: There is no module-level app or store. create_app()
receives (or builds) the storage instance and hangs it on app.state,
so every server process, and every test, owns exactly the store it
was given.
"""

from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from finance_dashboard import __version__
from finance_dashboard.api.dependencies import get_storage
from finance_dashboard.api.errors import register_exception_handlers, unhandled_exception_handler
from finance_dashboard.api.routes import analytics, categories, transactions
from finance_dashboard.audit import AuditLogger, create_correlation_id
from finance_dashboard.config import AppSettings, get_settings
from finance_dashboard.services.storage import FinanceStorageInterface, MemoryFinanceStorage
from finance_dashboard.validation import FinanceValidator


CORRELATION_HEADER = "X-Correlation-ID"


def create_app(
    storage: Optional[FinanceStorageInterface] = None,
    settings: Optional[AppSettings] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> FastAPI:
    """
    Build the API around a storage instance.

    Args:
        storage: Store to serve. Defaults to a new in-memory store,
                 seeded with the sample data if settings say so.
        settings: Server settings. Defaults to the cached settings.
        audit_logger: Audit sink. Defaults to a local-only logger.
    """
    settings = settings or get_settings().app
    if storage is None:
        storage = MemoryFinanceStorage(seed=settings.seed_sample_data)

    app = FastAPI(
        title="Finance Dashboard API",
        description="Receitas, despesas, categorias e análises do painel financeiro",
        version=__version__,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url=None if settings.is_production else "/openapi.json",
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.audit_logger = audit_logger or AuditLogger(history_size=settings.audit_history_size)
    app.state.validator = FinanceValidator(storage)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER],
    )

    @app.middleware("http")
    async def attach_correlation_id(request: Request, call_next):
        request.state.correlation_id = create_correlation_id()
        try:
            response = await call_next(request)
        except Exception as exc:
            # 500s are built here so they carry the header too
            response = await unhandled_exception_handler(request, exc)
        response.headers[CORRELATION_HEADER] = str(request.state.correlation_id)
        return response

    register_exception_handlers(app)

    prefix = settings.api_prefix
    app.include_router(transactions.router, prefix=f"{prefix}/transactions")
    app.include_router(categories.router, prefix=f"{prefix}/categories")
    app.include_router(analytics.router, prefix=f"{prefix}/analytics")

    @app.get(f"{prefix}/health", tags=["Root"])
    async def health(storage: FinanceStorageInterface = Depends(get_storage)):
        return {
            "status": "ok",
            "version": __version__,
            "transactions": len(await storage.list_transactions()),
            "categories": len(await storage.list_categories()),
        }

    return app
