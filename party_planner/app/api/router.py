"""
Top-level router for the admin page.

Aggregates the resource routers under ``endpoints``.  The page lives at
the site root, so no prefix is applied.
"""

from fastapi import APIRouter

from .endpoints import parties

router = APIRouter()

router.include_router(parties.router, tags=["parties"])
