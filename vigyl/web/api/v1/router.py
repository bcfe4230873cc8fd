"""API v1 router."""

from fastapi import APIRouter

from vigyl.web.api.v1 import taxonomy, prospects, expansions

router = APIRouter(prefix="/api/v1")

router.include_router(taxonomy.router, tags=["taxonomy"])
router.include_router(prospects.router, tags=["prospects"])
router.include_router(expansions.router, tags=["expansions"])
