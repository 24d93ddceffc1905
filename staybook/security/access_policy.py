"""
staybook/security/access_policy.py — Access Policy Gate

Single decision table for who may do what to a reservation. Route handlers
and the lifecycle service both consult it instead of checking roles ad hoc.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from staybook.errors import Forbidden
from staybook.models.ontology import GuestRole, Reservation


class Action(str, Enum):
    """Operations subject to authorization"""
    VIEW = "view"
    CANCEL = "cancel"
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    LIST_ALL = "list_all"
    MANAGE_INVENTORY = "manage_inventory"
    BOOK_FOR_OTHER = "book_for_other"


@dataclass(frozen=True)
class Actor:
    """Authenticated caller, resolved by the serving layer"""
    id: str
    role: GuestRole = GuestRole.GUEST
    email: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == GuestRole.ADMIN


Rule = Callable[[Actor, Optional[Reservation]], bool]


def _owner(actor: Actor, reservation: Optional[Reservation]) -> bool:
    return reservation is not None and reservation.guest_id == actor.id


def _nobody(actor: Actor, reservation: Optional[Reservation]) -> bool:
    return False


# Rules for non-admin actors; admins may perform every action.
GUEST_RULES: Dict[Action, Rule] = {
    Action.VIEW: _owner,
    Action.CANCEL: _owner,
    Action.CHECK_IN: _nobody,
    Action.CHECK_OUT: _nobody,
    Action.LIST_ALL: _nobody,
    Action.MANAGE_INVENTORY: _nobody,
    Action.BOOK_FOR_OTHER: _nobody,
}


def authorize(actor: Actor, reservation: Optional[Reservation], action: Action) -> bool:
    """Return True if ``actor`` may perform ``action`` on ``reservation``."""
    if actor.is_admin:
        return True
    rule = GUEST_RULES.get(action, _nobody)
    return rule(actor, reservation)


def ensure_authorized(actor: Actor, reservation: Optional[Reservation], action: Action) -> None:
    """Raise Forbidden when the gate denies the action."""
    if not authorize(actor, reservation, action):
        raise Forbidden(f"Actor {actor.id} may not {action.value}")
