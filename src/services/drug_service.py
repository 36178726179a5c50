"""
Drug Service for business logic.
Orchestrates lifecycle transitions between the API, the asset store and the event sink.
"""
import logging
from typing import List, Optional, Tuple
from src.core.clock import Clock, SystemClock
from src.core.exceptions import SupplyChainException, StoreException
from src.models.drug_codec import decode_drug, encode_drug
from src.models.drug_model import Drug
from src.repositories.asset_store import AssetStore
from src.repositories.event_publisher import EventPublisher
from src.services import audit_trail, lifecycle_engine
from src.services.authorization import RolePolicy
from src.services.lifecycle_engine import TransitionResult

logger = logging.getLogger(__name__)


class DrugService:
    """
    Service for drug lifecycle operations.
    
    Each mutating call reads the record once, lets the lifecycle engine
    decide, then writes once, conditioned on the version it read. The event
    is published only after the write succeeds.
    """
    
    def __init__(
        self,
        asset_store: AssetStore,
        event_publisher: EventPublisher,
        policy: RolePolicy,
        clock: Clock = None
    ):
        self.asset_store = asset_store
        self.event_publisher = event_publisher
        self.policy = policy
        self.clock = clock or SystemClock()
    
    def register_drug(
        self,
        caller_role: str,
        drug_id: str,
        name: str,
        batch_number: str,
        mfg_date: str,
        expiry_date: str,
        composition: str
    ) -> Drug:
        """
        Register a new drug as the manufacturer.
        
        Raises:
            UnauthorizedException: If the caller is not the manufacturer
            DrugAlreadyExistsException: If drug_id is already registered
            WriteConflictException: If a concurrent registration won the race
        """
        existing, version = self._load(drug_id)
        result = self._decide(
            "register", drug_id, caller_role,
            lambda: lifecycle_engine.register(
                existing, caller_role, drug_id, name, batch_number, mfg_date,
                expiry_date, composition, self.clock.now(), self.policy
            )
        )
        return self._commit(result, version)
    
    def ship_drug(self, caller_role: str, drug_id: str, destination: str) -> Drug:
        """
        Ship a drug to another organization.
        
        Raises:
            DrugNotFoundException: If the drug does not exist
            UnauthorizedException: If the caller is not the current owner
            InvalidStateException: If the drug has been recalled
            ValidationException: If the destination role is unknown
        """
        drug, version = self._load(drug_id)
        result = self._decide(
            "ship", drug_id, caller_role,
            lambda: lifecycle_engine.ship(drug, drug_id, caller_role, destination, self.clock.now(), self.policy)
        )
        return self._commit(result, version)
    
    def receive_drug(self, caller_role: str, drug_id: str) -> Drug:
        """
        Confirm receipt of a drug shipped to the caller.
        
        Raises:
            DrugNotFoundException: If the drug does not exist
            InvalidStateException: If the drug is not in transit to the caller
        """
        drug, version = self._load(drug_id)
        result = self._decide(
            "receive", drug_id, caller_role,
            lambda: lifecycle_engine.receive(drug, drug_id, caller_role, self.clock.now(), self.policy)
        )
        return self._commit(result, version)
    
    def recall_drug(self, caller_role: str, drug_id: str, reason: str) -> Drug:
        """
        Recall a drug as the regulator.
        
        Raises:
            UnauthorizedException: If the caller is not the regulator
            DrugNotFoundException: If the drug does not exist
        """
        drug, version = self._load(drug_id)
        result = self._decide(
            "recall", drug_id, caller_role,
            lambda: lifecycle_engine.recall(drug, drug_id, caller_role, reason, self.clock.now(), self.policy)
        )
        return self._commit(result, version)
    
    def track_drug(self, drug_id: str) -> Drug:
        """
        Retrieve the full record of a drug, history included.
        
        Raises:
            DrugNotFoundException: If the drug does not exist
        """
        drug, _ = self._load(drug_id)
        return lifecycle_engine.track(drug, drug_id)
    
    def get_drug_history(self, drug_id: str) -> List[str]:
        """
        Retrieve the audit trail of a drug as pipe-delimited rows.
        
        Raises:
            DrugNotFoundException: If the drug does not exist
        """
        return audit_trail.format_history(self.track_drug(drug_id))
    
    def drug_exists(self, drug_id: str) -> bool:
        """Check whether a drug id has been registered."""
        return self.asset_store.get(drug_id) is not None
    
    def _load(self, drug_id: str) -> Tuple[Optional[Drug], Optional[int]]:
        stored = self.asset_store.get(drug_id)
        if stored is None:
            return None, None
        return decode_drug(stored.data), stored.version
    
    def _decide(self, operation: str, drug_id: str, caller_role: str, decide):
        try:
            return decide()
        except SupplyChainException as e:
            logger.warning("Rejected %s of %s by %s: %s", operation, drug_id, caller_role, e.message)
            raise
    
    def _commit(self, result: TransitionResult, version: Optional[int]) -> Drug:
        drug = result.drug
        data = encode_drug(drug)
        try:
            self.asset_store.put(drug.drug_id, data, expected_version=version)
        except StoreException as e:
            logger.warning("Write of %s for %s failed: %s", result.transition.value, drug.drug_id, e.message)
            raise
        
        logger.info(
            "%s %s: %s -> %s, status %s",
            result.transition.value, drug.drug_id, result.entry.from_party,
            result.entry.to_party, drug.status.value
        )
        if result.event is not None:
            self.event_publisher.emit(result.event.name, result.event.payload)
        return drug
