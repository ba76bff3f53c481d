"""
TalentFlow Internship Portal - Main Application

FastAPI backend with:
- MongoDB for students, companies and internships
- Skill matching and applicant ranking computed per request
- Resume upload with keyword skill extraction

Run: uvicorn talentflow.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from talentflow.api.routes import api_router
from talentflow.core.config import get_settings
from talentflow.core.errors import PortalError
from talentflow.core.logging_config import setup_logging
from talentflow.db.mongodb import init_mongo_indexes, check_mongo_connection
from talentflow.services.matching_service import InvalidScoreInputError

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="TalentFlow Internship Portal",
    description="""
    Internship portal matching students to internships by skills.

    ## Features
    - **Students**: Profile, resume upload with skill extraction, suggestions
    - **Companies**: Internship postings and hiring analytics
    - **Applicants**: Ranked review queue with top/strong/potential badges

    ## Ranking
    final score = 50% skill match + 30% resume score + 20% skill density
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    """Client errors raised by the services (not found, already applied, ...)."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(InvalidScoreInputError)
async def invalid_score_handler(request: Request, exc: InvalidScoreInputError):
    """A stored score input is unusable; report it instead of ranking with NaN."""
    logger.error("Invalid scoring input on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except PyMongoError as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "TalentFlow Internship Portal"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if check_mongo_connection() else "disconnected"
    }
