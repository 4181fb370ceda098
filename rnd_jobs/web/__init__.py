from .api import router as api_router
from .webhooks import router as webhooks_router
from .sheets import router as sheets_router
from .realtime import router as realtime_router

__all__ = ["api_router", "webhooks_router", "sheets_router", "realtime_router"]
