from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# ✅ Import All API Routes
from app.api.routes import auth, resumes, stats, skills, admin, health

from app.core.config import CORS_ORIGINS, LOG_DIR, LOG_LEVEL
from app.core.logging_config import setup_logging
from app.db.init_db import init_db
from app.db.session import engine

logger = logging.getLogger(__name__)


# ============================================
# ✅ STARTUP: LOGGING + TABLES
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(log_level=LOG_LEVEL, log_dir=LOG_DIR)
    init_db(engine)
    logger.info("ResumeRocket API started")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="ResumeRocket API", lifespan=lifespan)

# ✅ CORS: ONLY THE CONFIGURED FRONTENDS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(resumes.router)
app.include_router(stats.router)
app.include_router(skills.router)
app.include_router(admin.router)
app.include_router(health.router)


# ============================================
# ✅ ROOT ENDPOINT
# ============================================

@app.get("/")
def root():
    return {"status": "ResumeRocket API running"}
