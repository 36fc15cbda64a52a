# FILE: main.py
"""
LiveText Backend - FastAPI Application
Version: 0.3.0

Backend for the visual page inspector. When the user edits text on a live
preview, the UI posts the rendered text plus the element's tag/id/class here
and the matching source file is rewritten in place.

Features:
- Project registry (id -> project root)
- Replace text by element hint (id > class > tag cascade)
- Replace plain text across project files (whitespace tolerant)
- Read/save project images as base64
"""
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load .env FIRST before any other imports that might need env vars
load_dotenv()

from livetext import __version__
from livetext.db import init_db
from livetext.config.source_edit import load_settings
from livetext.projects.router import router as projects_router
from livetext.source_edit.router import router as files_router

logging.basicConfig(
    level=os.getenv("LIVETEXT_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("livetext")

app = FastAPI(
    title="LiveText",
    version=__version__,
    description="Locate rendered page text in project sources and rewrite it",
)

# ====== CORS ======

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "file://",  # For Electron file:// protocol
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ====== STARTUP ======

@app.on_event("startup")
def on_startup():
    os.makedirs("data", exist_ok=True)
    init_db()

    settings = load_settings()
    logger.info("[startup] Replace mode: %s", settings.replace_mode.value)
    logger.info("[startup] Scanner depth cap: %d", settings.scan.max_depth)


# ====== ROUTERS ======

app.include_router(projects_router)
app.include_router(files_router)


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__}
