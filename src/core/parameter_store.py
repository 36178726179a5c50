"""
AWS Systems Manager Parameter Store lookup for the token signing secret.
"""
from functools import lru_cache
from typing import Optional
import boto3

JWT_SECRET_PARAMETER = "/drug-supply-chain-api/{environment}/jwt-secret"


def jwt_secret_parameter_name(environment: str) -> str:
    return JWT_SECRET_PARAMETER.format(environment=environment)


@lru_cache(maxsize=4)
def get_jwt_secret(environment: str, region: str = "us-east-1") -> Optional[str]:
    """
    Fetch the JWT signing secret for an environment, cached per process.
    
    Returns:
        The decrypted secret, or None if the parameter is not defined
    """
    ssm = boto3.client('ssm', region_name=region)
    try:
        response = ssm.get_parameter(Name=jwt_secret_parameter_name(environment), WithDecryption=True)
    except ssm.exceptions.ParameterNotFound:
        return None
    return response['Parameter']['Value']
