"""User profiles and role checks."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from honest_meals.domain.users import Role, UserRecord

# Roles a user may pick for themselves on the plans page.
PLAN_ROLES = (Role.STANDARD_USER, Role.PREMIUM_USER, Role.ULTRA_PREMIUM_USER)

_logger = logging.getLogger(__name__)


class RoleError(RuntimeError):
    """Raised when a user's role does not allow an action."""


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""

    def list_users(self) -> list[UserRecord]:
        """Return all users."""

    def set_role(self, user_id: UUID, role: Role) -> None:
        """Change a user's role."""

    def upsert_contact(
        self, user_id: UUID, full_name: str, phone_number: str, address: str
    ) -> None:
        """Store contact details entered at checkout."""


@dataclass
class UserService:
    """Application service for user profiles."""

    repository: UserRepository

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.repository.get_user(user_id)

    def list_users(self, search: str | None = None) -> list[UserRecord]:
        """Return users, optionally matching name or email case-insensitively."""
        users = self.repository.list_users()
        if not search:
            return users
        needle = search.lower()
        return [
            user
            for user in users
            if needle in (user.full_name or "").lower()
            or needle in (user.email or "").lower()
        ]

    def set_role(self, user_id: UUID, role: Role) -> None:
        self.repository.set_role(user_id, role)

    def change_plan(self, user_id: UUID, plan: Role) -> UserRecord | None:
        """Switch a signed-up user between the standard and premium plans.

        Returns None for unknown users. Guests must sign up first, and staff
        roles (trainers, influencers, admins) keep their role.
        """
        if plan not in PLAN_ROLES:
            raise ValueError(f"{plan} is not a subscription plan")
        user = self.repository.get_user(user_id)
        if user is None:
            return None
        if not self.check_role(user, [Role.STANDARD_USER]):
            raise RoleError("Sign up before choosing a plan")
        if user.role not in PLAN_ROLES:
            raise RoleError(f"{user.role} accounts cannot change plan")
        if user.role is plan:
            return user
        self.repository.set_role(user_id, plan)
        _logger.info("User %s switched plan from %s to %s", user_id, user.role, plan)
        return self.repository.get_user(user_id)

    @staticmethod
    def check_role(user: UserRecord | None, allowed: Iterable[Role]) -> bool:
        """Return True when the user's role satisfies any allowed role."""
        if user is None:
            return False
        return any(user.role.satisfies(role) for role in allowed)
