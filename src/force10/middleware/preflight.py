"""Share preflight results with every page response.

The middleware names to evaluate come from the written route manifest,
so only middleware that some client route actually carries is checked.

Usage::

    async def context_for(request) -> RequestContext:
        return RequestContext(
            request=request,
            users={"web": await current_user(request)},
            session=load_session(request.cookies.get("session", ""), SECRET),
        )

    app.add_middleware(PreflightMiddleware(
        PreflightEvaluator(),
        manifest_path="resources/js/force10-manifest.ts",
        context_factory=context_for,
    ))
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from force10._internal.invoke import invoke
from force10.config import Force10Config
from force10.manifest import extract_middleware, read_manifest
from force10.middleware.protocol import Next
from force10.preflight import PreflightEvaluator, RequestContext
from force10.sharing import PREFLIGHT_KEY, share

logger = logging.getLogger("force10.preflight")

type ContextFactory = Callable[[Any], RequestContext | Awaitable[RequestContext]]


class PreflightMiddleware:
    """Evaluate manifest middleware per request and share the results.

    The manifest is re-read only when its modification time changes.
    A missing manifest means there is nothing to evaluate.
    """

    __slots__ = (
        "_cache",
        "_cache_lock",
        "_context_factory",
        "_enabled",
        "_evaluator",
        "_manifest_path",
    )

    def __init__(
        self,
        evaluator: PreflightEvaluator,
        *,
        manifest_path: str | Path,
        context_factory: ContextFactory,
        enabled: bool = True,
    ) -> None:
        self._evaluator = evaluator
        self._manifest_path = Path(manifest_path)
        self._context_factory = context_factory
        self._enabled = enabled
        self._cache: tuple[float, tuple[str, ...]] | None = None
        self._cache_lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: Force10Config,
        context_factory: ContextFactory,
        *,
        evaluator: PreflightEvaluator | None = None,
    ) -> PreflightMiddleware:
        """Wire the middleware from project settings.

        The manifest path, the guards, the password timeout, and
        ``preflight_enabled`` (including ``FORCE10_PREFLIGHT``) all come
        from *config*. A passed *evaluator* keeps its own guard settings.
        """
        return cls(
            evaluator or PreflightEvaluator.from_config(config),
            manifest_path=config.manifest_path,
            context_factory=context_factory,
            enabled=config.enabled and config.preflight_enabled,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def evaluator(self) -> PreflightEvaluator:
        return self._evaluator

    def manifest_middleware(self) -> tuple[str, ...]:
        """Middleware names listed in the written manifest."""
        try:
            mtime = os.stat(self._manifest_path).st_mtime
        except OSError:
            return ()

        with self._cache_lock:
            if self._cache is not None and self._cache[0] == mtime:
                return self._cache[1]

        text = read_manifest(self._manifest_path)
        names = tuple(extract_middleware(text)) if text is not None else ()
        with self._cache_lock:
            self._cache = (mtime, names)
        logger.debug("Loaded %d middleware names from %s", len(names), self._manifest_path)
        return names

    async def __call__(self, request: Any, next: Next) -> Any:
        if self._enabled:
            middleware = self.manifest_middleware()
            if middleware:
                context = await invoke(self._context_factory, request)
                share(PREFLIGHT_KEY, self._evaluator.evaluate(context, middleware))
        return await next(request)
