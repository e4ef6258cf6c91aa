"""
Main FastAPI application
Role-based learning platform: quiz taking, course authoring and analytics
"""
from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from urllib.parse import urlencode
import logging
import time

from skillforge.config import settings
from skillforge.database import init_db
from skillforge.errors import SkillForgeError
from skillforge.api import analytics, auth, courses, quizzes, users
from skillforge.api.deps import GuardRedirect, require_view
from skillforge.schemas.user import Identity
from skillforge.services.access_guard import Decision, home_view, navigate
from skillforge.services.session_store import SessionStore
from skillforge.services.store import store
from skillforge.services.token_codec import token_codec

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Domain error -> HTTP status
STATUS_CODES = {
    "invalid_credentials": 401,
    "invalid_token": 401,
    "not_found": 404,
    "duplicate_email": 409,
    "validation_error": 400,
    "generation_failed": 502,
    "invalid_transition": 409,
    "operation_in_progress": 409,
}

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Role-based learning platform with quiz attempts, AI quiz generation and analytics",
    docs_url="/docs",
    redoc_url="/redoc"
)

# One browsing session per process; filled in on startup
app.state.session_store = SessionStore(store, token_codec)
app.state.attempts = {}

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing"""

    start_time = time.time()

    # Process request
    response = await call_next(request)

    # Calculate duration
    duration = time.time() - start_time

    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Duration: {duration:.3f}s"
    )

    return response


@app.exception_handler(SkillForgeError)
async def skillforge_exception_handler(request: Request, exc: SkillForgeError):
    """Report domain errors to the caller with a uniform body"""

    status_code = STATUS_CODES.get(exc.code, 400)
    logger.info(f"{request.method} {request.url.path} -> {exc.code}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
        }
    )


@app.exception_handler(GuardRedirect)
async def guard_redirect_handler(request: Request, exc: GuardRedirect):
    """Turn a guard decision into a loading response or a redirect"""

    result = exc.result
    if result.decision == Decision.SUSPEND:
        return JSONResponse(status_code=503, content={"status": "loading"})

    location = result.location
    if result.decision == Decision.REDIRECT_LOGIN and result.next:
        location = f"{location}?{urlencode({'next': result.next})}"

    return RedirectResponse(url=location, status_code=303)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors gracefully"""

    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "detail": str(exc) if settings.DEBUG else None
        }
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring

    Returns service status and session readiness
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "session_ready": not app.state.session_store.loading,
        "timestamp": time.time()
    }


# Root endpoint
@app.get("/")
async def dashboard(identity: Identity = Depends(require_view("/"))):
    """Send a signed-in user to their role's home view"""
    return RedirectResponse(url=home_view(identity.role), status_code=303)


# Include routers
app.include_router(auth.router)
app.include_router(quizzes.router)
app.include_router(courses.router)
app.include_router(analytics.router)
app.include_router(users.router)


@app.get("/{path:path}", include_in_schema=False)
async def unknown_view(path: str):
    """Unknown pages go to the dashboard, or to the login view when signed out"""
    raise GuardRedirect(navigate(app.state.session_store.state, f"/{path}"))


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize database and restore the session on startup"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    # Initialize database
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise

    app.state.session_store.initialize()
    logger.info("Application startup complete")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Drop in-memory session state; the persisted token survives"""
    logger.info("Shutting down application")
    app.state.attempts.clear()
    app.state.session_store.teardown()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "skillforge.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
