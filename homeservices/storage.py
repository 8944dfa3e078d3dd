"""JSON persistence of the application state into a session-scoped bucket.

A bucket is a flat ``str -> str`` mapping holding one browser session's
data.  ``SessionStore`` is the only code that reads or writes it.
"""
from __future__ import annotations

import json
from collections.abc import MutableMapping

from .models import Booking, Feedback, Session, User
from .state import AppState

SCHEMA_VERSION = 1

USERS_KEY = "users"
BOOKINGS_KEY = "bookings"
FEEDBACKS_KEY = "feedbacks"
CURRENT_USER_KEY = "currentUser"
VERSION_KEY = "schemaVersion"


class StorageError(Exception):
    """Raised when a bucket holds data that cannot be deserialized."""


class SessionStore:
    def __init__(self, bucket: MutableMapping[str, str], *, include_feedback: bool = True) -> None:
        self.bucket = bucket
        self.include_feedback = include_feedback

    def save(self, state: AppState) -> None:
        self.bucket[VERSION_KEY] = json.dumps(SCHEMA_VERSION)
        self.bucket[USERS_KEY] = json.dumps([u.to_dict() for u in state.users])
        self.bucket[BOOKINGS_KEY] = json.dumps([b.to_dict() for b in state.bookings])
        if self.include_feedback:
            self.bucket[FEEDBACKS_KEY] = json.dumps([f.to_dict() for f in state.feedbacks])
        current = state.current_user.to_dict() if state.current_user else None
        self.bucket[CURRENT_USER_KEY] = json.dumps(current)

    def load(self, state: AppState | None = None) -> AppState:
        """Populate ``state`` from the bucket.

        Collections whose key is absent are left untouched.  Malformed
        values raise ``StorageError``.
        """
        if state is None:
            state = AppState()

        version = self._read(VERSION_KEY)
        if version is not None and version != SCHEMA_VERSION:
            raise StorageError(f"unsupported schema version: {version!r}")

        users = self._read(USERS_KEY)
        if users is not None:
            state.users = self._records(USERS_KEY, users, User.from_dict)

        bookings = self._read(BOOKINGS_KEY)
        if bookings is not None:
            state.bookings = self._records(BOOKINGS_KEY, bookings, Booking.from_dict)

        if self.include_feedback:
            feedbacks = self._read(FEEDBACKS_KEY)
            if feedbacks is not None:
                state.feedbacks = self._records(FEEDBACKS_KEY, feedbacks, Feedback.from_dict)

        if CURRENT_USER_KEY in self.bucket:
            current = self._read(CURRENT_USER_KEY)
            state.current_user = (
                self._record(CURRENT_USER_KEY, current, Session.from_dict) if current else None
            )

        return state

    def clear(self) -> None:
        self.bucket.clear()

    def _read(self, key: str) -> object:
        raw = self.bucket.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"stored value for {key!r} is not valid JSON") from exc

    def _records(self, key, raw, factory):
        if not isinstance(raw, list):
            raise StorageError(f"stored value for {key!r} is not a list")
        return [self._record(key, item, factory) for item in raw]

    @staticmethod
    def _record(key, raw, factory):
        try:
            return factory(raw)
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"malformed record under {key!r}") from exc
