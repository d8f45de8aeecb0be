# Routers package
from . import schedule_router

__all__ = [
    "schedule_router",
]
