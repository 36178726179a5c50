"""
Byte encoding of Drug records for the asset store.
The JSON layout keeps the field names of the original ledger records.
"""
from pydantic import ValidationError
from src.core.exceptions import EncodingException
from src.models.drug_model import Drug
from src.models.dto.drug_dto import DrugRecord


def encode_drug(drug: Drug) -> bytes:
    """
    Serialize a Drug to JSON bytes.
    
    Raises:
        EncodingException: If the record cannot be serialized
    """
    try:
        return DrugRecord.from_domain(drug).model_dump_json(by_alias=True).encode("utf-8")
    except (ValidationError, ValueError, TypeError) as e:
        raise EncodingException(f"Failed to encode drug {drug.drug_id}: {str(e)}") from e


def decode_drug(data: bytes) -> Drug:
    """
    Deserialize JSON bytes produced by `encode_drug`.
    
    Raises:
        EncodingException: If the bytes are not a valid drug record
    """
    try:
        return DrugRecord.model_validate_json(data).to_domain()
    except (ValidationError, ValueError) as e:
        raise EncodingException(f"Stored drug record is corrupt: {str(e)}") from e
