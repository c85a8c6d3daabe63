"""
molla_api.api

API package for the Molla store backend.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, response models and error rendering.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth + delegation to services.
