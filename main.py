import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from assetverse.config.settings import settings
from assetverse.database import Base, SessionLocal, engine, transaction
from assetverse.errors import AssetVerseError
from assetverse.routers import users, assets, assignments, affiliations, asset_requests, packages
from assetverse.services.container import Services

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="AssetVerse API")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Every domain error becomes {"message": ...} with its status code
@app.exception_handler(AssetVerseError)
async def assetverse_error_handler(request: Request, exc: AssetVerseError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{field}: {first.get('msg')}" if field else str(first.get("msg", "Invalid request"))
    return JSONResponse(status_code=400, content={"message": message})

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Something went wrong"})

# Route registration
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(assignments.router, tags=["Assignments"])
app.include_router(assets.router, prefix="/assets", tags=["Assets"])
app.include_router(affiliations.router, prefix="/affiliations", tags=["Affiliations"])
app.include_router(asset_requests.router, prefix="/requests", tags=["Requests"])
app.include_router(packages.router, tags=["Packages"])

@app.on_event("startup")
async def startup_event():
    """Create tables and seed the package catalogue on first start"""
    logger.info("Starting AssetVerse API...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        with transaction(db):
            Services(db).packages.seed_packages()
    finally:
        db.close()

# Root route
@app.get("/")
def read_root():
    return {"message": "Welcome to Asset Verse Server"}

@app.get("/health")
def health():
    return {"status": "ok"}
