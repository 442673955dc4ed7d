# src/delivery/users/api/routes.py
from __future__ import annotations

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from delivery.config import Settings
from delivery.dependencies import get_account_service, get_settings_dep
from delivery.shared.api.response_models import ERROR_RESPONSES, PaginatedResponse
from delivery.users.api.dependencies import CurrentActor
from delivery.users.api.schemas import (
    AccountResponse,
    ReissueRequest,
    SigninRequest,
    SignupRequest,
    TokenResponse,
    UpdateProfileBody,
    UpdateRoleBody,
)
from delivery.users.application.account_service import AccountService
from delivery.users.application.dto import UpdateProfileRequest
from delivery.users.domain.role import Role
from delivery.users.domain.search import AccountSearchRequest

router = APIRouter(prefix="/api/user", tags=["users"], responses=ERROR_RESPONSES)

Service = Annotated[AccountService, Depends(get_account_service)]


@router.post("/signup", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, service: Service) -> AccountResponse:
    view = await service.signup(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        nickname=payload.nickname,
    )
    return AccountResponse.model_validate(view)


@router.post("/signin", response_model=TokenResponse)
async def signin(payload: SigninRequest, service: Service) -> TokenResponse:
    pair = await service.authenticate(payload.username, payload.password)
    return TokenResponse.model_validate(pair)


@router.post("/reissue", response_model=TokenResponse)
async def reissue(payload: ReissueRequest, service: Service) -> TokenResponse:
    pair = await service.reissue(payload.refresh_token)
    return TokenResponse.model_validate(pair)


@router.get("", response_model=PaginatedResponse[AccountResponse])
async def search_accounts(
    service: Service,
    settings: Annotated[Settings, Depends(get_settings_dep)],
    _actor: CurrentActor,
    username: Optional[str] = Query(None, max_length=50),
    email: Optional[str] = Query(None, max_length=255),
    role: Optional[Role] = Query(None),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    sort_by: str = Query("createdAt", alias="sortBy"),
    order: Optional[str] = Query(None),
) -> PaginatedResponse[AccountResponse]:
    request = AccountSearchRequest(
        username=username,
        email=email,
        role=role,
        page=page,
        size=min(size or settings.default_page_size, settings.max_page_size),
        sort_by=sort_by,
        order=order,
    )
    result = await service.search(request)
    return PaginatedResponse[AccountResponse].from_page(result, AccountResponse.model_validate)


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(account_id: UUID, service: Service, _actor: CurrentActor) -> AccountResponse:
    return AccountResponse.model_validate(await service.get_by_id(account_id))


@router.patch("/{account_id}", response_model=AccountResponse)
async def update_profile(
    account_id: UUID,
    payload: UpdateProfileBody,
    service: Service,
    actor: CurrentActor,
) -> AccountResponse:
    view = await service.update_profile(
        account_id,
        actor,
        UpdateProfileRequest(
            current_password=payload.current_password,
            new_password=payload.new_password,
            email=payload.email,
            nickname=payload.nickname,
        ),
    )
    return AccountResponse.model_validate(view)


@router.patch("/{account_id}/role", response_model=AccountResponse)
async def update_role(
    account_id: UUID,
    payload: UpdateRoleBody,
    service: Service,
    actor: CurrentActor,
) -> AccountResponse:
    return AccountResponse.model_validate(await service.update_role(account_id, actor, payload.role))


@router.patch("/{account_id}/delete", response_model=AccountResponse)
async def soft_delete(account_id: UUID, service: Service, actor: CurrentActor) -> AccountResponse:
    return AccountResponse.model_validate(await service.soft_delete(account_id, actor))
