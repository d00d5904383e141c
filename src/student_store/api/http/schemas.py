"""Request and response bodies for the HTTP API."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"

# Names and emails are trimmed; passwords are hashed exactly as sent
Text = Annotated[str, StringConstraints(strip_whitespace=True)]


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class StudentCreateRequest(RequestModel):
    name: Text = Field(min_length=1, max_length=255)
    email: Text = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=1, max_length=1024)


class LoginRequest(RequestModel):
    email: Text = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)


class StudentUpdateRequest(RequestModel):
    name: Text = Field(min_length=1, max_length=255)
    email: Text = Field(pattern=EMAIL_PATTERN, max_length=255)


class StudentPatchRequest(RequestModel):
    name: Text | None = Field(default=None, min_length=1, max_length=255)
    email: Text | None = Field(default=None, pattern=EMAIL_PATTERN, max_length=255)

    @model_validator(mode="after")
    def require_a_field(self) -> "StudentPatchRequest":
        if self.name is None and self.email is None:
            raise ValueError("At least one of name or email is required")
        return self


class ProductCreateRequest(RequestModel):
    name: Text = Field(min_length=1, max_length=255)
    price: float = Field(ge=0)
    description: Text = Field(default="", max_length=4096)
    image: Text = Field(default="", max_length=2048)
    email: Text = Field(pattern=EMAIL_PATTERN, max_length=255)


class MessageResponse(BaseModel):
    message: str


class CreatedResponse(MessageResponse):
    id: int


class StudentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class LoginResponse(MessageResponse):
    student: StudentResponse


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    description: str
    image: str
    email: str
