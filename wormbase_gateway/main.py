from __future__ import annotations

import logging
import os
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .catalogue import ENTITY_TYPES
from .clients.wormbase import BASE_URL, SEARCH_URL
from .routers.tools import TOOLS, router as tools_router

# ------------------------------------------------------------------------------
# Logging
# ------------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger("wormbase.main")

# ------------------------------------------------------------------------------
# App metadata / env
# ------------------------------------------------------------------------------
APP_TITLE = os.getenv("APP_TITLE", "WormBase Gateway")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
ROOT_PATH = os.getenv("ROOT_PATH", "")
DOCS_URL = os.getenv("DOCS_URL", "/docs")
OPENAPI_URL = os.getenv("OPENAPI_URL", "/openapi.json")

# ------------------------------------------------------------------------------
# FastAPI app
# ------------------------------------------------------------------------------
app = FastAPI(
    title=APP_TITLE,
    version=APP_VERSION,
    docs_url=DOCS_URL,
    openapi_url=OPENAPI_URL,
    root_path=ROOT_PATH,
)

# CORS (default permissive; tighten in prod with CORS_ALLOW_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tools_router, prefix="/v1")
log.info("Mounted %d tools under /v1 (upstream %s)", len(TOOLS), BASE_URL)

# ------------------------------------------------------------------------------
# Health
# ------------------------------------------------------------------------------
@app.get("/healthz")
@app.get("/v1/healthz")
async def healthz():
    return {"ok": True, "version": APP_VERSION}

@app.get("/livez")
@app.get("/v1/livez")
async def livez():
    return {"ok": True, "tools": len(TOOLS), "entity_types": len(ENTITY_TYPES)}

@app.get("/readyz")
@app.get("/v1/readyz")
async def readyz():
    return {
        "ok": True,
        "env": {
            "WORMBASE_BASE_URL": BASE_URL,
            "SEARCH_URL": SEARCH_URL,
        },
    }

@app.get("/")
async def root():
    return {
        "name": APP_TITLE,
        "version": APP_VERSION,
        "docs": DOCS_URL,
        "tools": sorted(TOOLS),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("wormbase_gateway.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
