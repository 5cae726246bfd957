"""
API package - FastAPI routes and schemas.
"""

from designer.api.routes import automations, simulation, workflows

__all__ = ["automations", "simulation", "workflows"]
