"""
Application package for the Party Planner admin page.

``core`` holds settings and logging, ``services`` the state store and
controller, ``views`` the page renderer and ``api`` the HTTP routes
that bind user actions to the controller.
"""

from .main import app  # noqa: F401
