"""Student account endpoints: registration, login, update, delete."""

from fastapi import APIRouter, Depends

from src.student_store.api.http.deps import get_student_service, request_body
from src.student_store.api.http.schemas import (
    CreatedResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    StudentCreateRequest,
    StudentPatchRequest,
    StudentResponse,
    StudentUpdateRequest,
)
from src.student_store.core.services import StudentService

router = APIRouter(tags=["students"])


def _create_student(
    body: StudentCreateRequest, service: StudentService
) -> CreatedResponse:
    student = service.register(body.name, body.email, body.password)
    return CreatedResponse(message="Student Added", id=student.id)


@router.post("/add-userdb", response_model=CreatedResponse)
def add_student(
    body: StudentCreateRequest = Depends(request_body(StudentCreateRequest)),
    service: StudentService = Depends(get_student_service),
) -> CreatedResponse:
    """Create a student."""
    return _create_student(body, service)


@router.post("/register", response_model=CreatedResponse)
def register(
    body: StudentCreateRequest = Depends(request_body(StudentCreateRequest)),
    service: StudentService = Depends(get_student_service),
) -> CreatedResponse:
    """Self-service registration; same contract as /add-userdb."""
    return _create_student(body, service)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest = Depends(request_body(LoginRequest)),
    service: StudentService = Depends(get_student_service),
) -> LoginResponse:
    """Check credentials. A mismatch is a 401, never a store error."""
    student = service.authenticate(body.email, body.password)
    return LoginResponse(
        message="Login Successful",
        student=StudentResponse.model_validate(student),
    )


@router.get("/users/{student_id}", response_model=StudentResponse)
def get_student(
    student_id: int,
    service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    """Read back a student's public fields."""
    return StudentResponse.model_validate(service.get(student_id))


@router.put("/update/{student_id}", response_model=MessageResponse)
def update_student(
    student_id: int,
    body: StudentUpdateRequest,
    service: StudentService = Depends(get_student_service),
) -> MessageResponse:
    """Replace a student's name and email."""
    service.update(student_id, name=body.name, email=body.email)
    return MessageResponse(message="Updated")


@router.patch("/update/{student_id}", response_model=MessageResponse)
def patch_student(
    student_id: int,
    body: StudentPatchRequest,
    service: StudentService = Depends(get_student_service),
) -> MessageResponse:
    """Change a student's name and/or email."""
    service.update(student_id, name=body.name, email=body.email)
    return MessageResponse(message="Updated")


@router.delete("/delete/{student_id}", response_model=MessageResponse)
def delete_student(
    student_id: int,
    service: StudentService = Depends(get_student_service),
) -> MessageResponse:
    """Delete a student by id."""
    service.delete(student_id)
    return MessageResponse(message="Deleted")
