"""
mc_orchestrator.api

API package for the Mobile Connect flow orchestrator service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, sessions and page templates.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request adaptation + delegation to the flow package.
