"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_user_service
from src.schemas.user import MessageResponse, UserCreate, UserResponse, UserUpdate
from src.services.user_service import Outcome, OutcomeKind, UserService

router = APIRouter(prefix="/users", tags=["users"])

ERROR_STATUS = {
    OutcomeKind.VALIDATION_FAILURE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    OutcomeKind.CONFLICT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.STORAGE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

ERROR_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": MessageResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
}


def to_response(outcome: Outcome, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Map an operation outcome to a JSON response."""
    if not outcome.ok:
        return JSONResponse(
            status_code=ERROR_STATUS[outcome.kind], content={"msg": outcome.message}
        )
    if outcome.user is not None:
        return JSONResponse(
            status_code=success_status, content=outcome.user.model_dump(by_alias=True)
        )
    return JSONResponse(status_code=success_status, content={"msg": outcome.message})


@router.get("/{user_id}", response_model=UserResponse, responses=ERROR_RESPONSES)
async def get_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get a user by ID."""
    return to_response(await service.fetch(user_id))


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_user(
    service: Annotated[UserService, Depends(get_user_service)],
    # A missing body is checked for required fields like an empty one
    user_data: UserCreate = UserCreate(),
):
    """Register a new user."""
    outcome = await service.create(user_data)
    return to_response(outcome, success_status=status.HTTP_201_CREATED)


@router.api_route(
    "/{user_id}",
    methods=["PUT", "PATCH"],
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
)
async def update_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
    user_data: UserUpdate = UserUpdate(),
):
    """Update the supplied fields of a user."""
    return to_response(await service.update(user_id, user_data))


@router.delete("/{user_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Delete a user."""
    return to_response(await service.delete(user_id))
