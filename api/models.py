"""
API request and response models for the Employee REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
employees/models.py, which own the internal domain representation. Route
handlers map between the two.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from employees.models import Employee

# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /register.

    The validators carry the user-facing messages; a failure answers 400
    before the handler runs, so nothing is written to the store.
    """

    username: str = Field(max_length=255)
    password: str

    @field_validator("username")
    @classmethod
    def username_min_length(cls, value: str) -> str:
        if len(value) < 3:
            raise ValueError("Username must be at least 3 characters long")
        return value

    @field_validator("password")
    @classmethod
    def password_min_length(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return value


class RegisterResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    auth: bool
    token: str


# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------


class EmployeeBody(BaseModel):
    """Request body for POST /employees and PUT /employees/{id}.

    All four fields are required: PUT is a full replace, not a patch.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(max_length=255)
    position: str = Field(max_length=255)
    department: str = Field(max_length=255)
    salary: float

    def to_domain(self) -> Employee:
        return Employee(
            name=self.name,
            position=self.position,
            department=self.department,
            salary=self.salary,
        )


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    position: str
    department: str
    salary: float

    @classmethod
    def from_domain(cls, employee: Employee) -> "EmployeeResponse":
        return cls(
            id=employee.id,
            name=employee.name,
            position=employee.position,
            department=employee.department,
            salary=employee.salary,
        )


class EmployeeWriteResponse(BaseModel):
    """Confirmation returned by PUT and DELETE, whether or not the id existed."""

    message: str
    id: int


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Envelope for every error response.

    auth is present on token/credential failures, errors on validation
    failures; both are omitted otherwise.
    """

    message: str
    auth: Optional[bool] = None
    errors: Optional[list[FieldError]] = None
