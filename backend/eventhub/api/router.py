"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter

from eventhub.api.routes import auth, events, registrations

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(events.router)
api_router.include_router(registrations.router)
