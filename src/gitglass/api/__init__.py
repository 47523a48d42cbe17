"""JSON API surface: envelope routing and the HTTP adapter."""

from gitglass.api.routes import dispatch, route_table

__all__ = ["dispatch", "route_table"]
