"""User and role models."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    """Account role stored on a user profile."""

    GUEST = "guest"
    STANDARD_USER = "standard_user"
    PREMIUM_USER = "premium_user"
    ULTRA_PREMIUM_USER = "ultra_premium_user"
    GYM_TRAINER = "gym_trainer"
    GYM_INFLUENCER = "gym_influencer"
    ADMIN = "admin"

    def satisfies(self, required: "Role") -> bool:
        """Return True when this role grants everything ``required`` grants."""
        if self is required or self is Role.ADMIN:
            return True
        return required in _IMPLIED_ROLES.get(self, frozenset())

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Parse a stored role, treating unknown values as guest."""
        try:
            return cls(value) if value else cls.GUEST
        except ValueError:
            return cls.GUEST


_IMPLIED_ROLES: dict[Role, frozenset[Role]] = {
    Role.STANDARD_USER: frozenset(),
    Role.PREMIUM_USER: frozenset({Role.STANDARD_USER}),
    Role.ULTRA_PREMIUM_USER: frozenset({Role.PREMIUM_USER, Role.STANDARD_USER}),
    Role.GYM_TRAINER: frozenset({Role.STANDARD_USER}),
    Role.GYM_INFLUENCER: frozenset({Role.STANDARD_USER}),
}


@dataclass(frozen=True)
class UserRecord:
    """Represents a user profile stored in the database."""

    id: UUID
    email: str | None
    full_name: str | None
    role: Role
    phone_number: str | None = None
    address: str | None = None
