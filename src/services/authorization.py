"""
Role authorization rules for drug lifecycle transitions.
Roles are opaque identifiers compared by exact string equality.
"""
from enum import Enum
from typing import Iterable, Optional
from src.core.exceptions import UnauthorizedException, ValidationException
from src.models.drug_model import Drug


class Transition(str, Enum):
    REGISTER = "Register"
    SHIP = "Ship"
    RECEIVE = "Receive"
    RECALL = "Recall"
    TRACK = "Track"


class Authority(str, Enum):
    MANUFACTURER = "manufacturer"
    CURRENT_OWNER = "current_owner"
    REGULATOR = "regulator"
    ANYONE = "anyone"


TRANSITION_AUTHORITY = {
    Transition.REGISTER: Authority.MANUFACTURER,
    Transition.SHIP: Authority.CURRENT_OWNER,
    # The consignee check for Receive is part of its transit-state guard.
    Transition.RECEIVE: Authority.CURRENT_OWNER,
    Transition.RECALL: Authority.REGULATOR,
    Transition.TRACK: Authority.ANYONE,
}

DENIAL_MESSAGES = {
    Authority.MANUFACTURER: "only the manufacturer can register drugs",
    Authority.CURRENT_OWNER: "only current owner can ship drug",
    Authority.REGULATOR: "only regulators can recall drugs",
}


class RolePolicy:
    """Role roster plus the designated manufacturer and regulator roles."""
    
    def __init__(self, manufacturer_role: str, regulator_role: str, known_roles: Iterable[str]):
        self.manufacturer_role = manufacturer_role
        self.regulator_role = regulator_role
        self.known_roles = frozenset(known_roles) | {manufacturer_role, regulator_role}
    
    @classmethod
    def from_settings(cls, settings) -> "RolePolicy":
        return cls(
            manufacturer_role=settings.manufacturer_role,
            regulator_role=settings.regulator_role,
            known_roles=settings.role_roster
        )
    
    def require_known_caller(self, role: str) -> str:
        """
        Validate the caller's role against the roster.
        
        Raises:
            UnauthorizedException: If the role is empty or not on the roster
        """
        if not role or role not in self.known_roles:
            raise UnauthorizedException(f"unrecognized caller role: {role!r}")
        return role
    
    def require_known_destination(self, role: str) -> str:
        """
        Validate a shipment destination against the roster.
        
        Raises:
            ValidationException: If the role is not on the roster
        """
        if not role or role not in self.known_roles:
            raise ValidationException(f"unknown destination role: {role!r}")
        return role
    
    def is_permitted(self, transition: Transition, caller_role: str, drug: Optional[Drug] = None) -> bool:
        authority = TRANSITION_AUTHORITY[transition]
        if authority is Authority.ANYONE:
            return True
        if authority is Authority.MANUFACTURER:
            return caller_role == self.manufacturer_role
        if authority is Authority.REGULATOR:
            return caller_role == self.regulator_role
        return drug is not None and drug.current_owner == caller_role
    
    def authorize(self, transition: Transition, caller_role: str, drug: Optional[Drug] = None) -> None:
        """
        Check the transition authority table for the caller.
        
        Raises:
            UnauthorizedException: If the caller's role does not hold the authority
        """
        if not self.is_permitted(transition, caller_role, drug):
            authority = TRANSITION_AUTHORITY[transition]
            raise UnauthorizedException(DENIAL_MESSAGES[authority])
