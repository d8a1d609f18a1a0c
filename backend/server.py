from fastapi import FastAPI, Request
from dotenv import load_dotenv
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
import os
import logging
from pathlib import Path

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')


# Security Headers Middleware
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), camera=(), microphone=()"

        # PDF preview is shown in an iframe of the web app
        if request.url.path.endswith("/pdf"):
            response.headers["X-Frame-Options"] = "SAMEORIGIN"
        else:
            response.headers["X-Frame-Options"] = "DENY"

        # HSTS - Enable in production
        if os.environ.get("ENVIRONMENT") == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

from database import db
from routes.auth import router as auth_router
from routes.users import router as users_router
from routes.branches import router as branches_router
from routes.listings import router as listings_router
from routes.receipts import router as receipts_router
from seed import seed_database

# App Version
APP_VERSION = "1.0"
SERVICE_NAME = "Carlton Real Estate Back Office"

app = FastAPI(title=SERVICE_NAME, version=APP_VERSION, redirect_slashes=False)

app.add_middleware(SecurityHeadersMiddleware)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(branches_router)
app.include_router(listings_router)
app.include_router(receipts_router)

app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=os.environ.get('CORS_ORIGINS', '*').split(','),
    allow_methods=["*"],
    allow_headers=["*"],
)

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def startup():
    result = await seed_database(db)
    logger.info(f"Seed: {result['message']}")


# Health endpoint for liveness/readiness checks (without /api prefix)
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": SERVICE_NAME, "version": APP_VERSION}


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": SERVICE_NAME, "version": APP_VERSION}
