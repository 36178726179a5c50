"""
Tests for caller identity resolution.
"""
import jwt
import pytest
from datetime import timedelta
from fastapi import HTTPException
from src.core.auth_dependencies import verify_caller_role
from src.core import config
from tests.conftest import make_token


class TestAuthDependencies:
    """Test suite for authentication dependencies."""
    
    def test_verify_caller_role_success(self):
        """Test token verification with valid token."""
        token = make_token("Distributor", secret=config.settings.jwt_secret)
        
        role = verify_caller_role(f"Bearer {token}")
        
        assert role == "Distributor"
    
    def test_role_is_returned_verbatim(self):
        """Test the role claim is not normalized."""
        token = make_token("distributor ", secret=config.settings.jwt_secret)
        
        assert verify_caller_role(f"Bearer {token}") == "distributor "
    
    def test_verify_token_missing_header(self):
        """Test token verification with missing authorization header."""
        with pytest.raises(HTTPException) as exc_info:
            verify_caller_role(None)
        
        assert exc_info.value.status_code == 401
        assert "Missing authorization header" in exc_info.value.detail
    
    def test_verify_token_invalid_format(self):
        """Test token verification with invalid header format."""
        with pytest.raises(HTTPException) as exc_info:
            verify_caller_role("InvalidFormat token123")
        
        assert exc_info.value.status_code == 401
        assert "Invalid authorization header format" in exc_info.value.detail
    
    def test_verify_token_expired(self):
        """Test token verification with expired token."""
        token = make_token("Distributor", secret=config.settings.jwt_secret, expires_in=timedelta(hours=-1))
        
        with pytest.raises(HTTPException) as exc_info:
            verify_caller_role(f"Bearer {token}")
        
        assert exc_info.value.status_code == 401
        assert "expired" in exc_info.value.detail.lower()
    
    def test_verify_token_invalid_signature(self):
        """Test token verification with invalid signature."""
        token = make_token("Regulator", secret="wrong-secret-key")
        
        with pytest.raises(HTTPException) as exc_info:
            verify_caller_role(f"Bearer {token}")
        
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid token"
    
    def test_verify_token_without_role(self):
        """Test a token that carries no role claim is rejected."""
        token = make_token(None, secret=config.settings.jwt_secret)
        
        with pytest.raises(HTTPException) as exc_info:
            verify_caller_role(f"Bearer {token}")
        
        assert exc_info.value.status_code == 401
        assert "Invalid token payload" in exc_info.value.detail
    
    def test_verify_token_with_non_string_role(self):
        """Test a token whose role claim is not a string is rejected."""
        token = make_token(None, secret=config.settings.jwt_secret)
        payload = jwt.decode(token, config.settings.jwt_secret, algorithms=["HS256"])
        payload["role"] = ["Manufacturer", "Regulator"]
        token = jwt.encode(payload, config.settings.jwt_secret, algorithm="HS256")
        
        with pytest.raises(HTTPException) as exc_info:
            verify_caller_role(f"Bearer {token}")
        
        assert exc_info.value.status_code == 401
    
    def test_verify_token_malformed(self):
        """Test token verification with malformed token."""
        with pytest.raises(HTTPException) as exc_info:
            verify_caller_role("Bearer not.a.jwt")
        
        assert exc_info.value.status_code == 401
