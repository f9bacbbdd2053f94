from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from roster_api.api.routes import health
from roster_api.core.config import settings
from roster_api.core.logging import bind_request_context, configure_logging, get_logger
from roster_api.core.monitoring import configure_error_monitoring
from roster_api.core.observability import configure_observability
from roster_api.db.session import init_db
from roster_api.domains.auth.router import router as auth_router
from roster_api.domains.storage.router import router as storage_router
from roster_api.domains.tables.router import router as tables_router
from roster_api.domains.users.router import router as users_router

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = bind_request_context(request.method, request.url.path, request.headers.get("x-request-id"))
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(health.router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(tables_router)
app.include_router(storage_router)


@app.on_event("startup")
def startup_event() -> None:
    if settings.create_tables:
        init_db()
    logger.info("startup_complete", env=settings.env)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Roster API running", "environment": settings.env}
