"""
Drug lifecycle engine.

Every transition is a pure function of (current record, caller role, inputs,
timestamp) and returns the next record together with the audit entry it
appended and the notification to publish, if any. Nothing here touches the
store, so a rejected transition can never leave a partial write behind.
"""
import json
from dataclasses import dataclass
from typing import Optional
from src.core.exceptions import DrugAlreadyExistsException, DrugNotFoundException, InvalidStateException
from src.models.asset_status import AssetStatus
from src.models.drug_model import Drug, HistoryEntry
from src.services import audit_trail
from src.services.authorization import RolePolicy, Transition

SHIPPABLE_STATES = frozenset({AssetStatus.IN_PRODUCTION, AssetStatus.IN_TRANSIT, AssetStatus.DELIVERED})

REGISTRATION_EVENT = "Registration"
SHIPMENT_EVENT = "Shipment"
RECALL_EVENT = "Recall"


@dataclass(frozen=True)
class DomainEvent:
    name: str
    payload: bytes


@dataclass(frozen=True)
class TransitionResult:
    transition: Transition
    drug: Drug
    entry: HistoryEntry
    event: Optional[DomainEvent] = None


def _event(name: str, **fields) -> DomainEvent:
    return DomainEvent(name=name, payload=json.dumps(fields, sort_keys=True).encode("utf-8"))


def _require_drug(drug: Optional[Drug], drug_id: str) -> Drug:
    if drug is None:
        raise DrugNotFoundException(f"drug {drug_id} does not exist")
    return drug


def register(
    existing: Optional[Drug],
    caller_role: str,
    drug_id: str,
    name: str,
    batch_number: str,
    mfg_date: str,
    expiry_date: str,
    composition: str,
    timestamp: str,
    policy: RolePolicy
) -> TransitionResult:
    """
    Create a drug record owned by the manufacturer.
    
    Raises:
        UnauthorizedException: If the caller is not the manufacturer role
        DrugAlreadyExistsException: If a record with drug_id exists
    """
    policy.require_known_caller(caller_role)
    policy.authorize(Transition.REGISTER, caller_role)
    if existing is not None:
        raise DrugAlreadyExistsException(f"drug {drug_id} already exists")
    
    entry = audit_trail.registered_entry(timestamp, caller_role)
    drug = Drug(
        drug_id=drug_id,
        name=name,
        manufacturer=caller_role,
        batch_number=batch_number,
        mfg_date=mfg_date,
        expiry_date=expiry_date,
        composition=composition,
        current_owner=caller_role,
        status=AssetStatus.IN_PRODUCTION,
        history=(entry,),
        is_recalled=False,
        inspection_notes=()
    )
    return TransitionResult(
        Transition.REGISTER, drug, entry,
        _event(REGISTRATION_EVENT, drugId=drug_id, manufacturer=caller_role)
    )


def ship(
    drug: Optional[Drug],
    drug_id: str,
    caller_role: str,
    destination: str,
    timestamp: str,
    policy: RolePolicy
) -> TransitionResult:
    """
    Hand the drug over to `destination` and mark it in transit.
    
    The history row records the owner before the handover as its origin.
    
    Raises:
        DrugNotFoundException: If the drug does not exist
        UnauthorizedException: If the caller is not the current owner
        InvalidStateException: If the drug has been recalled
        ValidationException: If the destination is not a known role
    """
    policy.require_known_caller(caller_role)
    drug = _require_drug(drug, drug_id)
    policy.authorize(Transition.SHIP, caller_role, drug)
    if drug.is_recalled or drug.status not in SHIPPABLE_STATES:
        raise InvalidStateException(f"drug {drug_id} is {drug.status.value} and cannot be shipped")
    policy.require_known_destination(destination)
    
    origin = drug.current_owner
    entry = audit_trail.shipped_entry(timestamp, origin, destination)
    shipped = drug.with_transition(entry, current_owner=destination, status=AssetStatus.IN_TRANSIT)
    return TransitionResult(
        Transition.SHIP, shipped, entry,
        _event(SHIPMENT_EVENT, drugId=drug_id, **{"from": origin, "to": destination})
    )


def receive(
    drug: Optional[Drug],
    drug_id: str,
    caller_role: str,
    timestamp: str,
    policy: RolePolicy
) -> TransitionResult:
    """
    Confirm arrival of an in-transit drug at its new owner.
    
    Raises:
        DrugNotFoundException: If the drug does not exist
        InvalidStateException: If the drug is not in transit to the caller
    """
    policy.require_known_caller(caller_role)
    drug = _require_drug(drug, drug_id)
    if drug.status is not AssetStatus.IN_TRANSIT or drug.current_owner != caller_role:
        raise InvalidStateException("drug is not in transit to this organization")
    
    entry = audit_trail.received_entry(timestamp, drug.current_owner, caller_role)
    return TransitionResult(
        Transition.RECEIVE,
        drug.with_transition(entry, status=AssetStatus.DELIVERED),
        entry
    )


def recall(
    drug: Optional[Drug],
    drug_id: str,
    caller_role: str,
    reason: str,
    timestamp: str,
    policy: RolePolicy
) -> TransitionResult:
    """
    Permanently withdraw a drug. Allowed from any state, including Recalled;
    each call appends its own history row and inspection note.
    
    Raises:
        UnauthorizedException: If the caller is not the regulator role
        DrugNotFoundException: If the drug does not exist
    """
    policy.require_known_caller(caller_role)
    policy.authorize(Transition.RECALL, caller_role)
    drug = _require_drug(drug, drug_id)
    
    entry = audit_trail.recalled_entry(timestamp, caller_role, reason)
    recalled = drug.with_transition(
        entry,
        status=AssetStatus.RECALLED,
        is_recalled=True,
        inspection_notes=drug.inspection_notes + (audit_trail.inspection_note(timestamp, reason),)
    )
    return TransitionResult(
        Transition.RECALL, recalled, entry,
        _event(RECALL_EVENT, drugId=drug_id, reason=reason)
    )


def track(drug: Optional[Drug], drug_id: str) -> Drug:
    """Return the drug as recorded. Tracking is open to every role."""
    return _require_drug(drug, drug_id)
