"""Domain records for the home-services booking app."""
from __future__ import annotations

import secrets
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

_BASE36 = string.digits + string.ascii_lowercase


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _to_base36(value: int) -> str:
    digits = []
    while True:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
        if value == 0:
            break
    return "".join(reversed(digits))


def generate_id() -> str:
    """Opaque id: base-36 millisecond timestamp plus random base-36 suffix."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(10))
    return _to_base36(int(time.time() * 1000)) + suffix


def _dump_timestamp(value: datetime) -> str:
    return value.isoformat()


def _load_timestamp(value: str) -> datetime:
    # Browser-written values end in "Z".
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class BookingStatus(str, Enum):
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    # Valid but never assigned by any operation.
    COMPLETED = "Completed"


@dataclass
class User:
    id: str
    name: str
    email: str
    phone: str
    password: str
    address: str = ""
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "password": self.password,
            "address": self.address,
            "createdAt": _dump_timestamp(self.created_at),
        }
        if self.avatar_url is not None:
            data["avatarUrl"] = self.avatar_url
        return data

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> User:
        return cls(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            phone=data["phone"],
            password=data["password"],
            address=data.get("address") or "",
            avatar_url=data.get("avatarUrl"),
            created_at=_load_timestamp(data["createdAt"]),
        )

    def to_dict_basic(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "avatar_url": self.avatar_url,
        }


@dataclass
class Session:
    """The signed-in actor: a reduced projection of a ``User``."""

    id: str
    name: str
    email: str
    phone: str

    @classmethod
    def for_user(cls, user: User) -> Session:
        return cls(id=user.id, name=user.name, email=user.email, phone=user.phone)

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "name": self.name, "email": self.email, "phone": self.phone}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Session:
        return cls(id=data["id"], name=data["name"], email=data["email"], phone=data["phone"])


@dataclass
class Booking:
    id: str
    user_id: str
    service: str
    price: str
    address: str
    date: str
    time: str
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "service": self.service,
            "price": self.price,
            "address": self.address,
            "date": self.date,
            "time": self.time,
            "status": self.status.value,
            "createdAt": _dump_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Booking:
        return cls(
            id=data["id"],
            user_id=data["userId"],
            service=data["service"],
            price=data["price"],
            address=data["address"],
            date=data["date"],
            time=data["time"],
            status=BookingStatus(data["status"]),
            created_at=_load_timestamp(data["createdAt"]),
        )


@dataclass
class Feedback:
    id: str
    user_id: str
    email: str
    phone: str
    service: str
    rating: int
    message: str
    category: str
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "email": self.email,
            "phone": self.phone,
            "service": self.service,
            "rating": self.rating,
            "message": self.message,
            "category": self.category,
            "createdAt": _dump_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Feedback:
        return cls(
            id=data["id"],
            user_id=data["userId"],
            email=data["email"],
            phone=data["phone"],
            service=data["service"],
            rating=int(data["rating"]),
            message=data["message"],
            category=data["category"],
            created_at=_load_timestamp(data["createdAt"]),
        )
