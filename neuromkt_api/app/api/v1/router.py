"""
Top-level router for version 1 of the API.

This router aggregates the domain routers (catalogs, projects,
participants, tests, results, statistics and users) under a unified
prefix.  When a new domain is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import (
    colors,
    words,
    fragrances,
    projects,
    participants,
    trials,
    results,
    statistics,
    users,
)

router = APIRouter()

router.include_router(colors.router, prefix="/colors", tags=["colors"])
router.include_router(words.router, prefix="/words", tags=["words"])
router.include_router(fragrances.router, prefix="/fragrances", tags=["fragrances"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(participants.router, prefix="/participants", tags=["participants"])
router.include_router(trials.router, prefix="/trials", tags=["trials"])
router.include_router(results.router, prefix="/results", tags=["results"])
router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
router.include_router(users.router, prefix="/users", tags=["users"])
