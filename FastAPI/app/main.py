import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import settings
from app.core.errors import error_body, register_exception_handlers
from app.core.rate_limiter import rate_limiter
from app.database import engine, init_db
from app.logging_config import setup_logging
from app.routers import admin, applicant, auth, employer

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET = "replace-with-a-long-random-secret-key"
AUTH_LIMITED_PATHS = {"/auth/sign-in", "/auth/sign-up", "/auth/verify-email", "/auth/resend-otp"}

app = FastAPI(
    title="Legaforce API",
    description="Recruitment platform: applicants, employers, job orders and the application pipeline.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(applicant.router)
app.include_router(employer.router)
app.include_router(admin.router)


def _rate_limit_for(method: str, path: str) -> tuple[int, str] | None:
    """(limit, bucket) for a rate-limited request. Every apply call shares one bucket per client."""
    if path in AUTH_LIMITED_PATHS:
        return settings.rate_limit_auth_per_min, path
    if method == "POST" and path.endswith("/apply"):
        return settings.rate_limit_apply_per_min, "apply"
    return None


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    if request.method == "OPTIONS":
        return await call_next(request)

    path = request.url.path
    rule = _rate_limit_for(request.method, path)
    if rule is not None and rule[0] > 0:
        limit, bucket = rule
        client_ip = request.client.host if request.client else "unknown"
        allowed, retry_after = rate_limiter.hit(f"{client_ip}:{bucket}", limit=limit, window_seconds=60)
        if not allowed:
            logger.warning("Rate limit hit: %s %s from %s", request.method, path, client_ip)
            return JSONResponse(
                status_code=429,
                content=error_body("Too many requests. Please retry shortly."),
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.on_event("startup")
def on_startup():
    logger.info("Starting Legaforce API (env=%s)", settings.app_env)
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == PLACEHOLDER_SECRET:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if "username:password@" in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
    else:
        if settings.secret_key == PLACEHOLDER_SECRET:
            logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
        if "username:password@" in settings.database_url:
            logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")
    init_db()


@app.get("/")
def root():
    return {"success": True, "message": "Legaforce API is running"}
