"""HTML routes."""

from fastapi import APIRouter

from poseidon.web import auth, health, home
from poseidon.web.crud import build_crud_router
from poseidon.web.entities import ENTITY_VIEWS

router = APIRouter()
router.include_router(home.router, tags=["home"])
router.include_router(auth.router, tags=["auth"])
router.include_router(health.router, prefix="/health", tags=["health"])
for entity_view in ENTITY_VIEWS:
    router.include_router(build_crud_router(entity_view))
