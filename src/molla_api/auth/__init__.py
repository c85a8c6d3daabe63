"""
molla_api.auth

Authentication/authorization package.

Responsibilities:
- JWT issuing/validation and bcrypt password hashing.
- Request gatekeeper, route policy and per-object authority checks.
- FastAPI auth dependencies (Principal + RBAC).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here performs I/O; user lookups happen in `services`.
