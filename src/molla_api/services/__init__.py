"""
molla_api.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Apply authentication and per-object authorization before touching repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services raise `molla_api.errors` exceptions; the API layer renders them.
