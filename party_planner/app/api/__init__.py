"""
HTTP routes for the admin page.

``router`` aggregates the page routes from ``endpoints``.  Every route
delegates to the :class:`PlannerController` stored on the application.
"""
