from __future__ import annotations

from fastapi import APIRouter

from .endpoints import artifacts, data, health, sites, stats, vocabulary

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(data.router, tags=["data"])
api_router.include_router(artifacts.router, prefix="/artifacts", tags=["artifacts"])
api_router.include_router(sites.router, prefix="/sites", tags=["sites"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(vocabulary.router, prefix="/vocabulary", tags=["vocabulary"])
