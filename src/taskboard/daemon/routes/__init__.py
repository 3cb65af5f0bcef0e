"""API routers for the taskboard daemon."""
