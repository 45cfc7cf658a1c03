"""
TSP Solver — Held-Karp Backend
==============================

FastAPI entry point.
Start with:  uvicorn main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tspsolver.api.routes import router

# ── Logging ────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── App ────────────────────────────────────────────────────────────
app = FastAPI(
    title="TSP Solver",
    description=(
        "Exact Travelling Salesman solver for small complete directed "
        "graphs, using the Held-Karp dynamic program over node subsets."
    ),
    version="1.0.0",
)

# CORS — allow browser front-ends to connect
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount all routes
app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": "TSP Solver",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }
