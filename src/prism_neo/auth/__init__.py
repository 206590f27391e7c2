"""
prism_neo.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers for the chat adapter calling this service.
- FastAPI auth dependencies (Principal + RBAC).
- Chat caller identity and admin-capability checks.
"""

# Package marker.
