import logging
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from unigig.api.routes import router
from unigig.core.config import settings
from unigig.core.exceptions import UniGigError, AuthError
from unigig.db.database import engine
from unigig.db.base import Base
import unigig.models  # noqa: F401  registers tables on Base.metadata


logging.basicConfig(level=logging.INFO)

app = FastAPI(title="UniGig")

logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Resume files are served back under the public URL recorded on the profile
Path(settings.RESUME_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/files/resumes", StaticFiles(directory=settings.RESUME_DIR), name="resumes")


@app.exception_handler(UniGigError)
async def unigig_error_handler(request: Request, exc: UniGigError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) and exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


@app.on_event("startup")
async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

app.include_router(router)


@app.get("/")
async def root():
    return {"status": "healthy", "message": "UniGig backend is running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
