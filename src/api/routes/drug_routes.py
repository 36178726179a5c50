"""
Drug API routes.
Handles HTTP endpoints for drug registration, custody transfer, recall and tracking.
"""
from fastapi import APIRouter, Depends, status
from src.services.drug_service import DrugService
from src.core.dependencies import get_drug_service
from src.core.auth_dependencies import verify_caller_role
from src.models.dto.drug_dto import (
    DrugHistoryResponse,
    DrugRecord,
    RecallDrugRequest,
    RegisterDrugRequest,
    ShipDrugRequest
)

router = APIRouter(prefix="/v1/api")


@router.post("/drugs", tags=["Manufacturer"], response_model=DrugRecord, status_code=status.HTTP_201_CREATED)
async def register_drug(
    request: RegisterDrugRequest,
    drug_service: DrugService = Depends(get_drug_service),
    caller_role: str = Depends(verify_caller_role)
):
    """
    Register a new drug unit. Only the manufacturer role may register.
    """
    drug = drug_service.register_drug(
        caller_role,
        drug_id=request.drug_id,
        name=request.name,
        batch_number=request.batch_number,
        mfg_date=request.mfg_date,
        expiry_date=request.expiry_date,
        composition=request.composition
    )
    return DrugRecord.from_domain(drug)


@router.post("/drugs/{drug_id}/shipments", tags=["Distribution"], response_model=DrugRecord)
async def ship_drug(
    drug_id: str,
    request: ShipDrugRequest,
    drug_service: DrugService = Depends(get_drug_service),
    caller_role: str = Depends(verify_caller_role)
):
    """
    Ship a drug to another organization. Only the current owner may ship.
    
    - **destination**: role of the receiving organization
    """
    drug = drug_service.ship_drug(caller_role, drug_id, request.destination)
    return DrugRecord.from_domain(drug)


@router.post("/drugs/{drug_id}/receipt", tags=["Distribution"], response_model=DrugRecord)
async def receive_drug(
    drug_id: str,
    drug_service: DrugService = Depends(get_drug_service),
    caller_role: str = Depends(verify_caller_role)
):
    """
    Confirm arrival of a drug that is in transit to the caller's organization.
    """
    drug = drug_service.receive_drug(caller_role, drug_id)
    return DrugRecord.from_domain(drug)


@router.post("/drugs/{drug_id}/recall", tags=["Regulator"], response_model=DrugRecord)
async def recall_drug(
    drug_id: str,
    request: RecallDrugRequest,
    drug_service: DrugService = Depends(get_drug_service),
    caller_role: str = Depends(verify_caller_role)
):
    """
    Recall a drug. Only the regulator role may recall.
    
    - **reason**: recorded in the history and the inspection notes
    """
    drug = drug_service.recall_drug(caller_role, drug_id, request.reason)
    return DrugRecord.from_domain(drug)


@router.get("/drugs/{drug_id}", tags=["Tracking"], response_model=DrugRecord)
async def track_drug(
    drug_id: str,
    drug_service: DrugService = Depends(get_drug_service)
):
    """
    Retrieve the full record of a drug. Open to every organization.
    """
    return DrugRecord.from_domain(drug_service.track_drug(drug_id))


@router.get("/drugs/{drug_id}/history", tags=["Tracking"], response_model=DrugHistoryResponse)
async def get_drug_history(
    drug_id: str,
    drug_service: DrugService = Depends(get_drug_service)
):
    """
    Retrieve the audit trail of a drug as "timestamp|event|from|to|details" rows.
    """
    entries = drug_service.get_drug_history(drug_id)
    return DrugHistoryResponse(drug_id=drug_id, entries=entries, count=len(entries))
