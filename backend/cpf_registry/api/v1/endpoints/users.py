"""User Endpoints.

RESTful API endpoints for the CPF user registry. Handlers are synchronous:
each one runs a single validate -> check -> mutate sequence on the User
aggregate. Domain errors propagate to the handlers registered in main.py.
"""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from ....core.constants import SuccessMessages
from ....core.logging import get_logger
from ....domain.ports import IdGenerator, UserStore
from ....domain.user import User
from ....schemas.user import (
    EditCpfRequest,
    EditCpfResponse,
    EditEmailRequest,
    EditEmailResponse,
    EditNameRequest,
    EditNameResponse,
    ErrorResponse,
    SpreadsheetExportResponse,
    SpreadsheetImportResponse,
    UserCreate,
    UserCreatedResponse,
    UserDetailResponse,
    UserResponse,
)
from ....services.spreadsheet_service import UserSpreadsheet
from ....utils import format_datetime, utc_now
from ...dependencies import get_id_generator, get_user_store

logger = get_logger(__name__)

router = APIRouter()

VALIDATION_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
}
NOT_FOUND_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    404: {"model": ErrorResponse, "description": "User not found"},
}


def _to_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, email=user.email, cpf=user.cpf)


# Spreadsheet routes are declared before "/{user_id}" so the literal path wins

@router.post(
    "/spreadsheet",
    response_model=SpreadsheetImportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Import users from a CSV spreadsheet",
    responses=VALIDATION_RESPONSES
)
def import_spreadsheet(
    file: UploadFile = File(...),
    store: UserStore = Depends(get_user_store),
    id_generator: IdGenerator = Depends(get_id_generator)
):
    """Create one user per row of a `name,cpf,email` CSV file.

    The whole file is validated before the first user is written. Errors
    name the offending file line.
    """
    raw = file.file.read()

    spreadsheet = UserSpreadsheet(store, id_generator)
    spreadsheet.validate_upload(file.content_type, len(raw))

    users = spreadsheet.build_users_from_content(spreadsheet.decode(raw))
    User(store).create_from_batch(users)

    logger.info(SuccessMessages.USERS_IMPORTED, extra={'created_users': len(users)})

    return SpreadsheetImportResponse(
        created_users=len(users),
        date_time=format_datetime(utc_now())
    )


@router.get(
    "/spreadsheet",
    response_model=SpreadsheetExportResponse,
    summary="Export active users as a CSV spreadsheet",
    responses=VALIDATION_RESPONSES
)
def export_spreadsheet(store: UserStore = Depends(get_user_store)):
    users = User(store).find_all()
    content = UserSpreadsheet(store).build_content_from_users(users)
    return SpreadsheetExportResponse(csv=content)


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List active users"
)
def list_users(store: UserStore = Depends(get_user_store)):
    return [_to_response(user) for user in User(store).find_all()]


@router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll a new user",
    responses=VALIDATION_RESPONSES
)
def create_user(
    payload: UserCreate,
    store: UserStore = Depends(get_user_store),
    id_generator: IdGenerator = Depends(get_id_generator)
):
    """Enroll a user.

    The CPF must pass the checksum and neither the CPF nor the email may
    belong to another active user.
    """
    user = User.build(
        store,
        name=payload.name,
        email=payload.email,
        cpf=payload.cpf,
        id_generator=id_generator
    )
    user.create()

    return UserCreatedResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        cpf=user.cpf,
        date_creation=user.date_creation
    )


@router.get(
    "/{user_id}",
    response_model=UserDetailResponse,
    summary="Get a user with its credit eligibility",
    responses=NOT_FOUND_RESPONSES
)
def get_user(user_id: str, store: UserStore = Depends(get_user_store)):
    """Get an active user.

    `is_credit_eligible` is 1 once six whole months have elapsed since
    enrollment, 0 otherwise.
    """
    details = User(store).find_by_id(user_id)

    return UserDetailResponse(
        id=details.id,
        name=details.name,
        email=details.email,
        cpf=details.cpf,
        is_credit_eligible=details.is_credit_eligible
    )


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft delete a user",
    responses=NOT_FOUND_RESPONSES
)
def delete_user(user_id: str, store: UserStore = Depends(get_user_store)):
    User(store).delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{user_id}/name",
    response_model=EditNameResponse,
    summary="Change a user's name",
    responses=NOT_FOUND_RESPONSES
)
def edit_name(
    user_id: str,
    payload: EditNameRequest,
    store: UserStore = Depends(get_user_store)
):
    user = User(store)
    user.id = user_id
    user.name = payload.name
    user.edit_name()

    return EditNameResponse(name=user.name, date_time=user.date_edition)


@router.patch(
    "/{user_id}/cpf",
    response_model=EditCpfResponse,
    summary="Change a user's CPF",
    responses=NOT_FOUND_RESPONSES
)
def edit_cpf(
    user_id: str,
    payload: EditCpfRequest,
    store: UserStore = Depends(get_user_store)
):
    user = User(store)
    user.id = user_id
    user.cpf = payload.cpf
    user.edit_cpf()

    return EditCpfResponse(cpf=user.cpf, date_time=user.date_edition)


@router.patch(
    "/{user_id}/email",
    response_model=EditEmailResponse,
    summary="Change a user's email",
    responses=NOT_FOUND_RESPONSES
)
def edit_email(
    user_id: str,
    payload: EditEmailRequest,
    store: UserStore = Depends(get_user_store)
):
    user = User(store)
    user.id = user_id
    user.email = payload.email
    user.edit_email()

    return EditEmailResponse(email=user.email, date_time=user.date_edition)
