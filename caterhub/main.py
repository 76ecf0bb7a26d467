### caterhub/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import configure_mappers

from caterhub.core.config import settings
from caterhub.db import create_db_and_tables
import caterhub.models  # registers all models via models/__init__.py
from caterhub.api import admin, public

configure_mappers()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


# Create the FastAPI app
app = FastAPI(
    title=f"{settings.business_name} API",
    version="1.0.0",
    description="Menu, orders, reviews and financial reports for a home catering business.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    log.info("Starting DB setup...")
    await create_db_and_tables()
    log.info("DB schema ready.")


@app.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(public.router)
app.include_router(admin.router, prefix="/admin")
