# fridge/main.py
import os
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from fridge.config import settings
from fridge.core.db import init_db, close_db
from fridge.core.errors import DomainError

from fridge.api.v1.routers import auth, recipes, reviews, favorites, uploads, admin

from fridge.core.bootstrap import ensure_default_admin
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    if exc.status_code >= 500:
        logger.error("[api] %s %s -> %s %s", request.method, request.url.path, exc.code, exc.message)
    else:
        logger.warning("[api] %s %s -> %s %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message, "error": exc.to_dict()},
    )

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # "body.title: String should have at least 3 characters"
    errors = [
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    logger.warning("[api] %s %s -> VALIDATION_ERROR %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Validation failed",
            "error": {"code": "VALIDATION_ERROR", "message": "Validation failed"},
            "errors": errors,
        },
    )

@app.on_event("startup")
async def on_startup():
    await init_db()
    # Ensure there's a default admin account on first run
    await ensure_default_admin()

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix="/api/v1")
app.include_router(recipes.router, prefix="/api/v1")
app.include_router(reviews.router, prefix="/api/v1")
app.include_router(favorites.router, prefix="/api/v1")
app.include_router(uploads.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")

# Uploaded images
os.makedirs(settings.upload_dir, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

@app.get("/healthz")
def healthz():
    return {"ok": True}
