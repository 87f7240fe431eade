"""
mc_orchestrator.backends

Auth Backend boundary.

Responsibilities:
- Define the discovery and authorization backend contracts the orchestrator calls.
- Provide the fallback backend used when none is wired in.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Concrete operator clients live outside this service and are injected through
# `create_app(discovery=..., authorization=...)`.
