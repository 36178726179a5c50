"""
Data Transfer Objects for the Drug Supply Chain API.
Defines request and response schemas for API endpoints and the stored record layout.
"""
from datetime import date
from pydantic import BaseModel, Field, field_validator, model_validator
from src.models.asset_status import AssetStatus, HistoryEvent
from src.models.drug_model import Drug, HistoryEntry


class RegisterDrugRequest(BaseModel):
    """Request schema for registering a new drug unit."""
    drug_id: str = Field(..., min_length=1, max_length=64, description="Unique drug identifier chosen by the registrant")
    name: str = Field(..., min_length=1, max_length=100, description="Name of the drug")
    batch_number: str = Field(..., min_length=1, max_length=64, description="Manufacturing batch number")
    mfg_date: str = Field(..., description="Manufacture date (YYYY-MM-DD)")
    expiry_date: str = Field(..., description="Expiry date (YYYY-MM-DD)")
    composition: str = Field(..., min_length=1, max_length=500, description="Active composition, e.g. 500mg")
    
    @field_validator('drug_id', 'name', 'batch_number', 'composition')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or v.strip() == "":
            raise ValueError("Field cannot be empty")
        return v.strip()
    
    @field_validator('mfg_date', 'expiry_date')
    @classmethod
    def validate_iso_date(cls, v: str) -> str:
        v = v.strip()
        try:
            date.fromisoformat(v)
        except ValueError:
            raise ValueError(f"Date must be in YYYY-MM-DD format, got: {v}")
        return v
    
    @model_validator(mode='after')
    def validate_expiry_after_manufacture(self) -> "RegisterDrugRequest":
        if date.fromisoformat(self.expiry_date) < date.fromisoformat(self.mfg_date):
            raise ValueError("expiry_date cannot be earlier than mfg_date")
        return self


class ShipDrugRequest(BaseModel):
    """Request schema for shipping a drug to another organization."""
    destination: str = Field(..., min_length=1, max_length=64, description="Role of the receiving organization")
    
    @field_validator('destination')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or v.strip() == "":
            raise ValueError("Field cannot be empty")
        return v.strip()


class RecallDrugRequest(BaseModel):
    """Request schema for a regulator recall."""
    reason: str = Field(..., min_length=1, max_length=500, description="Reason for the recall")
    
    @field_validator('reason')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or v.strip() == "":
            raise ValueError("Field cannot be empty")
        return v.strip()


class HistoryEntryRecord(BaseModel):
    """One audit trail row as stored and returned."""
    timestamp: str
    event: HistoryEvent
    from_party: str = Field(..., alias="from")
    to_party: str = Field(..., alias="to")
    details: str = ""
    
    class Config:
        populate_by_name = True


class DrugRecord(BaseModel):
    """Full drug record: the stored layout and the Track response."""
    drug_id: str = Field(..., alias="drugId")
    name: str
    manufacturer: str
    batch_number: str = Field(..., alias="batchNumber")
    mfg_date: str = Field(..., alias="mfgDate")
    expiry_date: str = Field(..., alias="expiryDate")
    composition: str
    current_owner: str = Field(..., alias="currentOwner")
    status: AssetStatus
    history: list[HistoryEntryRecord] = Field(..., min_length=1)
    is_recalled: bool = Field(default=False, alias="isRecalled")
    inspection_notes: list[str] = Field(default_factory=list, alias="inspectionNotes")
    
    class Config:
        populate_by_name = True
    
    @classmethod
    def from_domain(cls, drug: Drug) -> "DrugRecord":
        return cls(
            drug_id=drug.drug_id,
            name=drug.name,
            manufacturer=drug.manufacturer,
            batch_number=drug.batch_number,
            mfg_date=drug.mfg_date,
            expiry_date=drug.expiry_date,
            composition=drug.composition,
            current_owner=drug.current_owner,
            status=drug.status,
            history=[
                HistoryEntryRecord(
                    timestamp=entry.timestamp,
                    event=entry.event,
                    from_party=entry.from_party,
                    to_party=entry.to_party,
                    details=entry.details
                )
                for entry in drug.history
            ],
            is_recalled=drug.is_recalled,
            inspection_notes=list(drug.inspection_notes)
        )
    
    def to_domain(self) -> Drug:
        return Drug(
            drug_id=self.drug_id,
            name=self.name,
            manufacturer=self.manufacturer,
            batch_number=self.batch_number,
            mfg_date=self.mfg_date,
            expiry_date=self.expiry_date,
            composition=self.composition,
            current_owner=self.current_owner,
            status=self.status,
            history=tuple(
                HistoryEntry(
                    timestamp=row.timestamp,
                    event=row.event,
                    from_party=row.from_party,
                    to_party=row.to_party,
                    details=row.details
                )
                for row in self.history
            ),
            is_recalled=self.is_recalled,
            inspection_notes=tuple(self.inspection_notes)
        )


class DrugHistoryResponse(BaseModel):
    """Response schema for the rendered audit trail of a drug."""
    drug_id: str
    entries: list[str]
    count: int
