from pydantic import BaseModel, Field
from typing import Optional, List

from app.schemas.business import BusinessRecord

class APIResponse(BaseModel):
    """Envelope shared by GET /businesses and POST /businesses/save."""
    success: bool = Field(..., description="Whether the backend handled the request")
    data: Optional[List[BusinessRecord]] = Field(None, description="Records returned by the API, if any")
    count: Optional[int] = Field(None, description="Number of records in data")
    error: Optional[str] = Field(None, description="Error message when success is false")

class SaveRequest(BaseModel):
    data: List[BusinessRecord] = Field(default_factory=list, description="The whole collection to store")

class SaveResult(BaseModel):
    success: bool
    accepted_count: int = 0
    records: Optional[List[BusinessRecord]] = None
    error: Optional[str] = None
