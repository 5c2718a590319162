"""
API module - routes and schemas.
Routes are split by domain: roadmap, layout, tutor, settings.
"""

from .routes import register_routes
from .state import GenerationRunState

__all__ = ["GenerationRunState", "register_routes"]
