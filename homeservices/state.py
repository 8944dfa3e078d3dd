"""Per-request application state owned by the page controllers."""
from __future__ import annotations

from dataclasses import dataclass, field

from .models import Booking, Feedback, Session, User


@dataclass
class AppState:
    users: list[User] = field(default_factory=list)
    bookings: list[Booking] = field(default_factory=list)
    feedbacks: list[Feedback] = field(default_factory=list)
    current_user: Session | None = None

    @property
    def authenticated(self) -> bool:
        return self.current_user is not None

    def find_user(self, user_id: str) -> User | None:
        return next((u for u in self.users if u.id == user_id), None)

    def find_user_by_email(self, email: str) -> User | None:
        return next((u for u in self.users if u.email == email), None)

    def owned_bookings(self) -> list[Booking]:
        """Bookings of the signed-in user, in insertion order."""
        if self.current_user is None:
            return []
        return [b for b in self.bookings if b.user_id == self.current_user.id]

    def owned_feedbacks(self) -> list[Feedback]:
        if self.current_user is None:
            return []
        return [f for f in self.feedbacks if f.user_id == self.current_user.id]
