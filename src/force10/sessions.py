"""Read the host's signed cookie session for preflight.

Hosts that keep sessions in a cookie signed with ``itsdangerous`` (the
usual setup for Python apps with cookie sessions) can hand the raw
cookie to ``load_session`` to build a ``RequestContext``::

    session = load_session(request.cookies.get("session", ""), SECRET_KEY)
    context = RequestContext(request=request, users=users, session=session)

Reading never fails: a bad signature, an expired cookie, or a payload
that isn't a dict all produce an empty session.
"""

import logging
from typing import Any

from itsdangerous import BadData, URLSafeTimedSerializer

from force10.errors import ConfigurationError

logger = logging.getLogger("force10.preflight")


class SessionReader:
    """Verify and decode signed session cookies.

    Usage::

        reader = SessionReader(secret_key="...", max_age=86400)
        session = reader.load(cookie_value)
    """

    __slots__ = ("_max_age", "_serializer")

    def __init__(self, secret_key: str, *, max_age: int | None = 86400, salt: str | None = None) -> None:
        if not secret_key:
            msg = "SessionReader secret_key must not be empty."
            raise ConfigurationError(msg)
        if salt is None:
            self._serializer = URLSafeTimedSerializer(secret_key)
        else:
            self._serializer = URLSafeTimedSerializer(secret_key, salt=salt)
        self._max_age = max_age

    def load(self, cookie_value: str | None) -> dict[str, Any]:
        if not cookie_value:
            return {}
        try:
            data = self._serializer.loads(cookie_value, max_age=self._max_age)
        except BadData as exc:
            logger.debug("Rejected session cookie: %s", exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return data


def load_session(
    cookie_value: str | None,
    secret_key: str,
    max_age: int | None = 86400,
) -> dict[str, Any]:
    """Decode one signed session cookie. See ``SessionReader``."""
    return SessionReader(secret_key, max_age=max_age).load(cookie_value)
