# app/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, stock_engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.helpers.json_response_helper import success_response
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from . import models  # noqa: F401  registers the tables on Base
from .router import audit_log_router, product_router, stock_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)

# Create all tables
Base.metadata.create_all(bind=stock_engine)

# This MUST exist for uvicorn
app = FastAPI(title="Stock Control Service API")

# 1️⃣ CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2️⃣ Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)

# Register exception handlers
setup_exception_handlers(app)


@app.get("/api/health")
def health():
    return success_response({"status": "healthy"}, "Service is healthy")


# Routers
app.include_router(product_router.router)
app.include_router(stock_router.router)
app.include_router(audit_log_router.router)
