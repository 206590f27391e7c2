"""
prism_neo.space_api

Client boundary for the remote access/billing API.

Responsibilities:
- Typed response models for the API payloads this service reads.
- An async HTTP client with one method per remote operation.
- A structured error type for failed calls.
"""

from prism_neo.space_api.client import SpaceApiClient, create_http_client, make_url
from prism_neo.space_api.errors import SpaceApiError

__all__ = ["SpaceApiClient", "SpaceApiError", "create_http_client", "make_url"]
