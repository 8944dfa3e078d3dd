"""Shared Flask extensions for the application."""
from __future__ import annotations

import secrets
from collections import OrderedDict

from flask import Flask, current_app, session
from flask_cors import CORS

SESSION_ID_KEY = "sid"


class SessionStorage:
    """Server-side, per-browser-session ``str -> str`` buckets.

    Buckets live in process memory on ``app.extensions`` and are addressed
    by a random id kept in the signed session cookie.  Nothing survives a
    restart.  Once ``SESSION_BUCKET_LIMIT`` buckets exist, the one used least
    recently is dropped.
    """

    extension_name = "session_storage"

    def __init__(self, app: Flask | None = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        app.extensions[self.extension_name] = OrderedDict()

    @property
    def _buckets(self) -> OrderedDict[str, dict[str, str]]:
        return current_app.extensions[self.extension_name]

    def bucket(self, create: bool = False) -> dict[str, str]:
        """Return the caller's bucket.

        A caller without a stored bucket gets a detached empty dict unless
        ``create`` is set, in which case a session id and bucket are issued.
        """
        buckets = self._buckets
        sid = session.get(SESSION_ID_KEY)
        if sid in buckets:
            buckets.move_to_end(sid)
            return buckets[sid]
        if not create:
            return {}

        if sid is None:
            sid = secrets.token_urlsafe(24)
            session[SESSION_ID_KEY] = sid
        buckets[sid] = {}
        self._evict(buckets)
        return buckets[sid]

    def discard(self) -> None:
        """Drop the caller's bucket and forget the session id."""
        sid = session.pop(SESSION_ID_KEY, None)
        if sid is not None:
            self._buckets.pop(sid, None)
        session.clear()

    @staticmethod
    def _evict(buckets: OrderedDict[str, dict[str, str]]) -> None:
        limit = max(current_app.config["SESSION_BUCKET_LIMIT"], 1)
        while len(buckets) > limit:
            buckets.popitem(last=False)
            current_app.logger.info("Dropped idle session bucket (limit %d)", limit)


cors = CORS()

# Bucket storage shared across the app.
session_storage = SessionStorage()
