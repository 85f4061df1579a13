import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from campus_housing.config.settings import settings
from campus_housing.database.mongo_client import require_mongodb_uri, check_mongo_connection, MongoConnection
from campus_housing.modules.documents import routes as documents_routes
from campus_housing.modules.auth import routes as auth_routes
from campus_housing.modules.profiles import routes as profiles_routes
from campus_housing.modules.groups import routes as groups_routes
from campus_housing.modules.listings import routes as listings_routes
from campus_housing.modules.applications import routes as applications_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Document API (MongoDB): /api/person, /api/group, /api/listing, /api/application
app.include_router(documents_routes.router, prefix="/api")

# Service layer (Supabase)
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(profiles_routes.router, prefix="/api/v1")
app.include_router(groups_routes.router, prefix="/api/v1")
app.include_router(listings_routes.router, prefix="/api/v1")
app.include_router(applications_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    # Refuse to start without a document store; raises RuntimeError when MONGODB_URI is unset
    require_mongodb_uri()
    logger.info(f"Application startup (mongodb database: {settings.mongodb_db})")


@app.on_event("shutdown")
async def shutdown_event():
    MongoConnection.reset_client()
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to campus-housing-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness check: reports whether MongoDB answers a ping."""
    mongodb_ok = check_mongo_connection()
    return JSONResponse(
        status_code=200 if mongodb_ok else 503,
        content={"status": "ready" if mongodb_ok else "unavailable", "mongodb": mongodb_ok},
    )
