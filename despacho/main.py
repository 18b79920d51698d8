"""
API REST del despacho (entrypoint ASGI: despacho.main:app).
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from despacho.api.actions import router as actions_router
from despacho.api.appointments import router as appointments_router
from despacho.api.cases import router as cases_router
from despacho.api.clients import router as clients_router
from despacho.api.documents import router as documents_router
from despacho.api.reports import router as reports_router
from despacho.core.config import get_settings
from despacho.core.database import init_db
from despacho.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Despacho API started", action="startup", environment=get_settings().environment)
    yield


# =========================================================
# FASTAPI APP
# =========================================================

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="API REST para la gestión de clientes, expedientes, actuaciones, citas, documentos e informes",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in (
    clients_router,
    cases_router,
    actions_router,
    appointments_router,
    documents_router,
    reports_router,
):
    app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    """Endpoint raíz."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "status": "operational",
        "endpoints": [
            "/api/clientes",
            "/api/expedientes",
            "/api/actuaciones",
            "/api/citas",
            "/api/documentos",
            "/api/reportes",
        ],
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
