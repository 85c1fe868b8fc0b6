"""Pydantic Schemas for API Request/Response Validation.

Field rules (CPF checksum, email syntax, length limits) are enforced by the
User aggregate, so request schemas only describe the payload shape.
"""

from pydantic import BaseModel, ConfigDict, Field


class UserBase(BaseModel):
    """Base schema with common fields."""
    name: str
    email: str
    cpf: str


class UserCreate(UserBase):
    """Schema for enrolling a new user.

    The id and creation timestamp are assigned by the server.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Maria Souza",
                "email": "maria.souza@email.com",
                "cpf": "48472338088",
            }
        }
    )


class UserResponse(UserBase):
    """Schema for a listed user."""
    id: str


class UserCreatedResponse(UserResponse):
    """Schema returned after enrollment."""
    date_creation: str


class UserDetailResponse(UserResponse):
    """Schema for a single user, with its derived credit eligibility."""
    is_credit_eligible: int = Field(..., ge=0, le=1)


class EditNameRequest(BaseModel):
    name: str


class EditCpfRequest(BaseModel):
    cpf: str


class EditEmailRequest(BaseModel):
    email: str


class EditNameResponse(BaseModel):
    name: str
    date_time: str


class EditCpfResponse(BaseModel):
    cpf: str
    date_time: str


class EditEmailResponse(BaseModel):
    email: str
    date_time: str


class SpreadsheetImportResponse(BaseModel):
    """Schema returned after a CSV import."""
    created_users: int
    date_time: str


class SpreadsheetExportResponse(BaseModel):
    """Schema carrying the exported CSV text."""
    csv: str


class ErrorResponse(BaseModel):
    """Standard error response schema."""
    error: str
    detail: str | None = None
    request_id: str | None = None
