"""
Audit trail construction and rendering.
"""
from typing import List
from src.models.asset_status import HistoryEvent
from src.models.drug_model import Drug, HistoryEntry

SYSTEM_PARTY = "SYSTEM"
BROADCAST_PARTY = "ALL"

REGISTERED_DETAILS = "Drug registered in system"
SHIPPED_DETAILS = "Drug shipment initiated"
RECEIVED_DETAILS = "Drug received"


def registered_entry(timestamp: str, manufacturer: str) -> HistoryEntry:
    return HistoryEntry(timestamp, HistoryEvent.REGISTERED, SYSTEM_PARTY, manufacturer, REGISTERED_DETAILS)


def shipped_entry(timestamp: str, origin: str, destination: str) -> HistoryEntry:
    return HistoryEntry(timestamp, HistoryEvent.SHIPPED, origin, destination, SHIPPED_DETAILS)


def received_entry(timestamp: str, owner: str, receiver: str) -> HistoryEntry:
    return HistoryEntry(timestamp, HistoryEvent.RECEIVED, owner, receiver, RECEIVED_DETAILS)


def recalled_entry(timestamp: str, regulator: str, reason: str) -> HistoryEntry:
    return HistoryEntry(timestamp, HistoryEvent.RECALLED, regulator, BROADCAST_PARTY, reason)


def inspection_note(timestamp: str, reason: str) -> str:
    return f"Recall on {timestamp}: {reason}"


def format_history(drug: Drug) -> List[str]:
    """Render a drug's history, oldest first, as pipe-delimited audit rows."""
    return [entry.to_legacy_string() for entry in drug.history]
