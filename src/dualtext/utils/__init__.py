"""
Shared utilities.
"""

from .http_client import HTTPClient

__all__ = ["HTTPClient"]
