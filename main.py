import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskhub import __version__
from taskhub.config.settings import Settings
from taskhub.database import Base, engine
from taskhub.routers import auth, user, project, task, comment
import taskhub.models  # noqa: F401  registers every table on Base.metadata

logging.basicConfig(
    level=Settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Taskhub API", version=__version__)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route registration
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(user.router, prefix="/api/users", tags=["Users"])
app.include_router(project.router, prefix="/api/projects", tags=["Projects"])
app.include_router(task.router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(comment.router, prefix="/api/comments", tags=["Comments"])

@app.on_event("startup")
def startup_event():
    """Create missing tables when the application starts"""
    logger.info("Starting Taskhub API...")
    Settings.warn_insecure_defaults()
    if Settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables are ready")

# Root route
@app.get("/")
def read_root():
    return {"message": "Taskhub API"}

@app.get("/health")
def health():
    return {"status": "ok"}
