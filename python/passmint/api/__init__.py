"""
HTTP JSON API for Passmint.
"""

from .app import app, create_app

__all__ = ['app', 'create_app']
