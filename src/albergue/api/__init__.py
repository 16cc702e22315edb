"""
API HTTP.

Expone el matching de albergues para la UI existente.
"""

from albergue.api.app import create_app

__all__ = ["create_app"]
