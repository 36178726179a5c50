"""
Domain model for the Drug asset and its audit trail.
Database-agnostic representation of a tracked drug unit.
"""
from dataclasses import dataclass, field, replace
from typing import Tuple
from src.models.asset_status import AssetStatus, HistoryEvent


@dataclass(frozen=True)
class HistoryEntry:
    """One immutable row of a drug's provenance chain."""
    timestamp: str
    event: HistoryEvent
    from_party: str
    to_party: str
    details: str = ""
    
    def to_legacy_string(self) -> str:
        """Render as the pipe-delimited "timestamp|event|from|to|details" row."""
        return "|".join([self.timestamp, self.event.value, self.from_party, self.to_party, self.details])


@dataclass(frozen=True)
class Drug:
    """
    Domain model representing a drug unit moving through the supply chain.
    
    Instances are never mutated; transitions derive a new value with
    `with_transition`, which keeps status and history changes together.
    """
    drug_id: str
    name: str
    manufacturer: str
    batch_number: str
    mfg_date: str
    expiry_date: str
    composition: str
    current_owner: str
    status: AssetStatus
    history: Tuple[HistoryEntry, ...]
    is_recalled: bool = False
    inspection_notes: Tuple[str, ...] = field(default_factory=tuple)
    
    def with_transition(self, entry: HistoryEntry, **changes) -> "Drug":
        """Return a copy with `changes` applied and `entry` appended to the history."""
        return replace(self, history=self.history + (entry,), **changes)
    
    @property
    def last_entry(self) -> HistoryEntry:
        return self.history[-1]
