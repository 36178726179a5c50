"""
FastAPI dependencies for resolving the caller's organizational role from a JWT.
"""
import jwt
from fastapi import Header, HTTPException, status
from typing import Optional
from src.core import config


def verify_caller_role(authorization: Optional[str] = Header(None)) -> str:
    """
    Verify JWT token from Authorization header and return the caller's role.
    
    Args:
        authorization: Authorization header value (Bearer <token>)
        
    Returns:
        Role identifier carried in the token's role claim
        
    Raises:
        HTTPException: If token is missing, invalid, expired or carries no role
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header"
        )
    
    if not authorization.startswith('Bearer '):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format"
        )
    
    token = authorization[7:]
    settings = config.settings
    
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        role = payload.get(settings.jwt_role_claim)
        
        if not role or not isinstance(role, str):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token payload"
            )
        
        return role
        
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired"
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
