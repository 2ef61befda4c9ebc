from pydantic import BaseModel, Field, StrictStr
from typing import Optional

class ExplainRequest(BaseModel):
    code: StrictStr = Field(..., min_length=1, description="Source text to explain")
    language: Optional[str] = None
    path: Optional[str] = None
    question: Optional[str] = Field(default=None, description="Follow-up question about the code")

class ReviewRequest(BaseModel):
    code: StrictStr = Field(..., min_length=1)
    language: Optional[str] = None
    path: Optional[str] = None

class DetectRequest(BaseModel):
    code: StrictStr
    path: Optional[str] = None

class ExplainResponse(BaseModel):
    explanation: str
    source_mode: str
    note: Optional[str] = None

class DetectResponse(BaseModel):
    language: str

class ErrorResponse(BaseModel):
    error: str
