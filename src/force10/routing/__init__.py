"""Routing — the route table force10 scans.

Routes are registered during setup and frozen with ``compile()``.
Request matching belongs to the host framework; this table only
records what each route is and how it is handled.
"""

from force10.routing.route import ClosureAction, ControllerAction, Route, RouteAction
from force10.routing.router import Router, RouteSource

__all__ = [
    "ClosureAction",
    "ControllerAction",
    "Route",
    "RouteAction",
    "RouteSource",
    "Router",
]
