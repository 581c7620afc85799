"""
Web package for the Album Catalog: the Flask application factory, its
templates, and the stylesheet.
"""

from album_catalog.web.app import create_app

__all__ = ["create_app"]
