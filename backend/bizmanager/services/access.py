"""
Business Manager Backend — Access Policy
========================================

What:  Who is calling, and what they may see.
How:   Every scoped route depends on `get_actor`, which parses the
       `shopName` / `userRole` / `userId` query parameters into an `Actor`.
       Services consult `can_access()` for single records and the Actor's
       helpers for list scoping.

Visibility rules:
    - A caller without a shop sees nothing from scoped lists
    - Owners see every record of their shop
    - Other roles see records of their shop they participate in
      (assigned worker / transporter / editor, or the employee themselves)
    - "undefined" / "null" / empty identifiers count as absent
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from fastapi import Query

from bizmanager.models.user import ROLE_OWNER

_ABSENT = {"", "undefined", "null"}


def clean_identifier(value: Optional[str]) -> Optional[str]:
    """Treats the client's placeholder strings for a missing value as None."""
    if value is None:
        return None
    value = value.strip()
    return None if value in _ABSENT else value


@dataclass(frozen=True)
class Actor:
    shop_name: Optional[str] = None
    role: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def is_owner(self) -> bool:
        return self.role == ROLE_OWNER

    @property
    def is_scoped(self) -> bool:
        """True when the caller named a shop; unscoped callers get empty lists."""
        return self.shop_name is not None

    @property
    def can_list(self) -> bool:
        """Whether a scoped list query may return anything at all."""
        if not self.is_scoped:
            return False
        return self.is_owner or self.user_id is not None


@dataclass(frozen=True)
class Resource:
    """The access-relevant facts of one record."""
    shop_name: Optional[str]
    participant_ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, shop_name: Optional[str], participants: Iterable[Optional[str]] = ()) -> "Resource":
        return cls(shop_name, frozenset(p for p in participants if p))


def can_access(actor: Actor, resource: Resource) -> bool:
    """
    Decides whether `actor` may read or act on `resource`.

    Callers that did not name a shop are not restricted by shop; that is
    how internal tooling and unscoped endpoints call the services.
    """
    if actor.is_scoped and resource.shop_name != actor.shop_name:
        return False
    if actor.is_owner or not resource.participant_ids:
        return True
    return actor.user_id in resource.participant_ids


def get_actor(
    shop_name: Optional[str] = Query(default=None, alias="shopName"),
    user_role: Optional[str] = Query(default=None, alias="userRole"),
    user_id: Optional[str] = Query(default=None, alias="userId"),
) -> Actor:
    """FastAPI dependency building the caller's Actor from the query string."""
    return Actor(
        shop_name=clean_identifier(shop_name),
        role=clean_identifier(user_role),
        user_id=clean_identifier(user_id),
    )
