"""
Core configuration for the Drug Supply Chain API.
Manages environment variables, AWS service settings and the role roster.
"""
import logging
import os
from typing import List
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""
    
    # AWS Configuration
    aws_region: str = os.getenv("AWS_REGION", "us-east-1")
    assets_table_name: str = os.getenv("ASSETS_TABLE_NAME", "DrugAssets")
    event_bus_name: str = os.getenv("EVENT_BUS_NAME", "default")
    event_source: str = os.getenv("EVENT_SOURCE", "drug-supply-chain")
    
    # Collaborator backends
    store_backend: str = os.getenv("STORE_BACKEND", "dynamodb")
    event_backend: str = os.getenv("EVENT_BACKEND", "eventbridge")
    
    # API Configuration
    api_title: str = os.getenv("API_TITLE", "Drug Supply Chain API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    
    # Organizational roles
    manufacturer_role: str = os.getenv("MANUFACTURER_ROLE", "Manufacturer")
    regulator_role: str = os.getenv("REGULATOR_ROLE", "Regulator")
    known_roles: str = os.getenv("KNOWN_ROLES", "Manufacturer,Distributor,Pharmacy,Regulator")
    
    # Authentication
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_role_claim: str = os.getenv("JWT_ROLE_CLAIM", "role")
    
    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    
    # Environment
    environment: str = os.getenv("ENVIRONMENT", "dev")
    
    @property
    def role_roster(self) -> List[str]:
        """Known role identifiers, always including the manufacturer and regulator."""
        roles = [role.strip() for role in self.known_roles.split(",") if role.strip()]
        for role in (self.manufacturer_role, self.regulator_role):
            if role not in roles:
                roles.append(role)
        return roles
    
    @property
    def jwt_secret(self) -> str:
        """Get JWT secret from Parameter Store."""
        fallback = os.getenv("JWT_SECRET", "dev-secret-change-in-production")
        if self.environment in ("dev", "test"):
            return fallback
        try:
            from src.core.parameter_store import get_jwt_secret
            secret = get_jwt_secret(self.environment, self.aws_region)
        except Exception as e:
            logger.warning("Using fallback JWT secret. Error: %s", e)
            return fallback
        if secret is None:
            logger.warning("No JWT secret parameter for %s; using fallback", self.environment)
            return fallback
        return secret
    
    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
