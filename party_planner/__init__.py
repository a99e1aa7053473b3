"""
Top-level package for the Party Planner admin page.

The data service client lives in :mod:`party_planner.service_api` and
the shared record models in :mod:`party_planner.schemas`.  The web
application (state store, renderer and routes) lives under ``app``.
"""

__all__ = []
