from pydantic import BaseModel, Field

class ErrorResponse(BaseModel):
    """Error response body"""
    success: bool = Field(False, description="Always false")
    status: int = Field(..., description="HTTP status code")
    code: str = Field(..., description="Error code")
    reason: str = Field(..., description="Human readable reason")
    timeStamp: str = Field(..., description="Response time (ISO format)")
    path: str = Field(..., description="Request path")
