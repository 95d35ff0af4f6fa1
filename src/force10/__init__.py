"""force10 — route manifests, preflight, and preloading for page apps.

Statically infers which page component each route renders, writes a
manifest the client router imports, and shares per-request middleware
state so the client can navigate before the server answers.

Basic usage::

    from force10 import Router, load_config
    from force10.generate import generate

    router = Router()
    router.get("/", lambda: Inertia.render("Welcome"))
    router.page("/about", "About")

    generate(router, load_config())
"""

__version__ = "0.1.0"
__all__ = [
    "CacheControlMiddleware",
    "ComponentResolver",
    "ConfigurationError",
    "Force10Config",
    "Force10Error",
    "ManifestEntry",
    "ManifestWriter",
    "PreflightEvaluator",
    "PreflightMiddleware",
    "PreloadTagGenerator",
    "RequestContext",
    "RouteScanner",
    "Router",
    "load_config",
    "share",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import force10`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from force10.routing.router import Router

        return Router

    if name in ("Force10Config", "load_config"):
        from force10 import config as _config

        return getattr(_config, name)

    if name == "ComponentResolver":
        from force10.resolution.resolver import ComponentResolver

        return ComponentResolver

    if name == "RouteScanner":
        from force10.scanner import RouteScanner

        return RouteScanner

    if name in ("ManifestEntry", "ManifestWriter"):
        from force10 import manifest as _manifest

        return getattr(_manifest, name)

    if name in ("PreflightEvaluator", "RequestContext"):
        from force10 import preflight as _preflight

        return getattr(_preflight, name)

    if name == "PreloadTagGenerator":
        from force10.preload import PreloadTagGenerator

        return PreloadTagGenerator

    if name in ("CacheControlMiddleware", "PreflightMiddleware"):
        from force10 import middleware as _mw

        return getattr(_mw, name)

    if name == "share":
        from force10.sharing import share

        return share

    if name in ("Force10Error", "ConfigurationError"):
        from force10 import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
