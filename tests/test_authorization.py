"""
Tests for the role authorization table.
"""
import pytest
from src.core.exceptions import UnauthorizedException, ValidationException
from src.core.config import Settings
from src.services.authorization import RolePolicy, Transition, TRANSITION_AUTHORITY, Authority
from src.services import lifecycle_engine
from tests.conftest import DISTRIBUTOR, MANUFACTURER, PARACETAMOL, PHARMACY, REGULATOR


class TestRolePolicy:
    """Test suite for RolePolicy."""
    
    @pytest.fixture
    def registered(self, policy):
        return lifecycle_engine.register(
            None, MANUFACTURER, timestamp="2024-01-01T00:00:00+00:00", policy=policy,
            **PARACETAMOL
        ).drug
    
    def test_every_transition_has_an_authority(self):
        assert set(TRANSITION_AUTHORITY) == set(Transition)
        assert TRANSITION_AUTHORITY[Transition.TRACK] is Authority.ANYONE
    
    def test_register_only_manufacturer(self, policy):
        assert policy.is_permitted(Transition.REGISTER, MANUFACTURER)
        for role in (DISTRIBUTOR, PHARMACY, REGULATOR):
            assert not policy.is_permitted(Transition.REGISTER, role)
    
    def test_recall_only_regulator(self, policy):
        assert policy.is_permitted(Transition.RECALL, REGULATOR)
        for role in (MANUFACTURER, DISTRIBUTOR, PHARMACY):
            assert not policy.is_permitted(Transition.RECALL, role)
    
    def test_ship_only_current_owner(self, policy, registered):
        assert policy.is_permitted(Transition.SHIP, MANUFACTURER, registered)
        assert not policy.is_permitted(Transition.SHIP, DISTRIBUTOR, registered)
        assert not policy.is_permitted(Transition.SHIP, MANUFACTURER, None)
    
    def test_track_open_to_all(self, policy):
        for role in (MANUFACTURER, DISTRIBUTOR, PHARMACY, REGULATOR, "anyone"):
            assert policy.is_permitted(Transition.TRACK, role)
    
    def test_roles_compared_exactly(self, policy):
        assert not policy.is_permitted(Transition.REGISTER, "manufacturer")
        assert not policy.is_permitted(Transition.REGISTER, " Manufacturer")
    
    def test_authorize_raises_with_reason(self, policy):
        with pytest.raises(UnauthorizedException) as exc_info:
            policy.authorize(Transition.RECALL, DISTRIBUTOR)
        assert "only regulators can recall" in str(exc_info.value)
    
    def test_require_known_caller(self, policy):
        assert policy.require_known_caller(PHARMACY) == PHARMACY
        with pytest.raises(UnauthorizedException):
            policy.require_known_caller("Smuggler")
        with pytest.raises(UnauthorizedException):
            policy.require_known_caller("")
    
    def test_require_known_destination(self, policy):
        assert policy.require_known_destination(DISTRIBUTOR) == DISTRIBUTOR
        with pytest.raises(ValidationException):
            policy.require_known_destination("Smuggler")
    
    def test_from_settings(self):
        settings = Settings(
            manufacturer_role="CiplaMSP",
            regulator_role="CDSCOMSP",
            known_roles="MedlifeMSP, ApolloMSP"
        )
        
        policy = RolePolicy.from_settings(settings)
        
        assert policy.manufacturer_role == "CiplaMSP"
        assert policy.regulator_role == "CDSCOMSP"
        assert policy.known_roles == {"CiplaMSP", "CDSCOMSP", "MedlifeMSP", "ApolloMSP"}
