from reelgate.web.routers.auth import router as auth_router
from reelgate.web.routers.video import router as video_router

__all__ = [
    "auth_router",
    "video_router",
]
