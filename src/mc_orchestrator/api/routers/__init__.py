"""
mc_orchestrator.api.routers

HTTP routers.
"""
