"""
mc_orchestrator.flow

Mobile Connect flow core.

Responsibilities:
- Typed flow status union and failure taxonomy.
- Per-session auth configuration, status interpretation and rendering.
- The orchestrator composing them behind four entry points.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package imports FastAPI; the HTTP layer adapts requests into
# `FlowRequest` values and renders the descriptors returned here.
