"""
Dash front end: layout builders, component ids and callback registrars.
"""

from .dash_app import create_dash_app

__all__ = ["create_dash_app"]
