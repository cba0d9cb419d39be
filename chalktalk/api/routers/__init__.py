"""API routers."""

from chalktalk.api.routers.editor import router as editor_router
from chalktalk.api.routers.playbooks import router as playbooks_router
from chalktalk.api.routers.plays import router as plays_router

__all__ = [
    "editor_router",
    "playbooks_router",
    "plays_router",
]
