"""
API v1 routes.

Defines REST endpoints for the Stake-Gated Email Registry API.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_principal, get_stake_registry, get_token_ledger
from src.api.models import (
    DelegateStakeRequest,
    EmailRegisteredResponse,
    EmailVerificationResponse,
    ErrorResponse,
    MinStakeDurationRequest,
    MinStakeDurationResponse,
    MintRequest,
    RegisterEmailRequest,
    RegisterEmailResponse,
    StakeRequest,
    StakeResponse,
    TokenResponse,
    canonical_email,
)
from src.domain.exceptions import (
    AlreadyMinted,
    AlreadyStaked,
    EmailAlreadyRegistered,
    NotStaked,
    StakingError,
    StakingPeriodNotMet,
    Unauthorized,
)
from src.domain.ledger import TokenLedger
from src.domain.staking import StakeRegistry

router = APIRouter(tags=["v1"])

# Each domain error kind maps to one fixed status and message
_ERROR_RESPONSES: dict[type[StakingError], tuple[int, str]] = {
    AlreadyMinted: (status.HTTP_409_CONFLICT, "Already minted"),
    AlreadyStaked: (status.HTTP_409_CONFLICT, "Already staked"),
    NotStaked: (status.HTTP_403_FORBIDDEN, "Not staked"),
    StakingPeriodNotMet: (status.HTTP_403_FORBIDDEN, "Staking period not met"),
    EmailAlreadyRegistered: (status.HTTP_409_CONFLICT, "Email already registered"),
    Unauthorized: (status.HTTP_403_FORBIDDEN, "Unauthorized"),
}


def _http_error(exc: StakingError) -> HTTPException:
    status_code, detail = _ERROR_RESPONSES[type(exc)]
    return HTTPException(status_code=status_code, detail=detail)


@router.post(
    "/tokens",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Missing wallet address"},
        409: {"model": ErrorResponse, "description": "Token already minted"},
        422: {"description": "Validation error"},
    },
    summary="Mint a token",
    description="Record the calling wallet as owner of a new token identifier.",
)
async def mint_token(
    request_data: MintRequest,
    principal: str = Depends(get_principal),
    ledger: TokenLedger = Depends(get_token_ledger),
) -> TokenResponse:
    try:
        ledger.mint(principal, request_data.token_id)
    except AlreadyMinted as exc:
        raise _http_error(exc) from None
    return TokenResponse(token_id=request_data.token_id, owner=principal)


@router.get(
    "/tokens/{token_id}",
    response_model=TokenResponse,
    responses={404: {"model": ErrorResponse, "description": "Token not minted"}},
    summary="Get token owner",
)
async def get_token(
    token_id: int,
    ledger: TokenLedger = Depends(get_token_ledger),
) -> TokenResponse:
    owner = ledger.owner_of(token_id)
    if owner is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Token not found")
    return TokenResponse(token_id=token_id, owner=owner)


@router.post(
    "/stakes",
    response_model=StakeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Missing wallet address"},
        409: {"model": ErrorResponse, "description": "Caller already staked"},
        422: {"description": "Validation error"},
    },
    summary="Stake a token",
    description="Create the caller's stake record. The staking clock starts now.",
)
async def stake_token(
    request_data: StakeRequest,
    principal: str = Depends(get_principal),
    registry: StakeRegistry = Depends(get_stake_registry),
) -> StakeResponse:
    try:
        stake = registry.stake(principal, request_data.token_id)
    except AlreadyStaked as exc:
        raise _http_error(exc) from None
    return StakeResponse.from_stake(stake, registry.eligible_at(stake.staker))


@router.post(
    "/stakes/delegate",
    response_model=StakeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Missing wallet address"},
        409: {"model": ErrorResponse, "description": "Caller already staked"},
        422: {"description": "Validation error"},
    },
    summary="Stake a token with delegation",
    description="Create the caller's stake record with staking authority "
    "delegated to another wallet. The delegate gets no stake record of its own.",
)
async def delegate_stake(
    request_data: DelegateStakeRequest,
    principal: str = Depends(get_principal),
    registry: StakeRegistry = Depends(get_stake_registry),
) -> StakeResponse:
    delegate = request_data.delegate.strip().lower()
    try:
        stake = registry.delegate_stake(principal, request_data.token_id, delegate)
    except AlreadyStaked as exc:
        raise _http_error(exc) from None
    return StakeResponse.from_stake(stake, registry.eligible_at(stake.staker))


@router.get(
    "/stakes/{address}",
    response_model=StakeResponse,
    responses={404: {"model": ErrorResponse, "description": "No stake for address"}},
    summary="Get stake record",
)
async def get_stake(
    address: str,
    registry: StakeRegistry = Depends(get_stake_registry),
) -> StakeResponse:
    stake = registry.get_stake(address.strip().lower())
    if stake is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stake not found")
    return StakeResponse.from_stake(stake, registry.eligible_at(stake.staker))


@router.post(
    "/emails",
    response_model=RegisterEmailResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Missing wallet address"},
        403: {"model": ErrorResponse, "description": "Not staked or staking period not met"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        422: {"description": "Validation error"},
    },
    summary="Register an email",
    description="Permanently bind an email to the calling wallet. "
    "The caller must have staked for at least the minimum stake duration.",
)
async def register_email(
    request_data: RegisterEmailRequest,
    principal: str = Depends(get_principal),
    registry: StakeRegistry = Depends(get_stake_registry),
) -> RegisterEmailResponse:
    try:
        email = registry.register_email(principal, request_data.email)
    except (NotStaked, StakingPeriodNotMet, EmailAlreadyRegistered) as exc:
        raise _http_error(exc) from None
    return RegisterEmailResponse(message="Email registered", email=email, principal=principal)


@router.get(
    "/emails/{email:path}/registered",
    response_model=EmailRegisteredResponse,
    summary="Check whether an email is registered",
)
async def is_email_registered(
    email: str,
    registry: StakeRegistry = Depends(get_stake_registry),
) -> EmailRegisteredResponse:
    email = canonical_email(email)
    return EmailRegisteredResponse(email=email, registered=registry.is_email_registered(email))


@router.get(
    "/emails/{email:path}/verify",
    response_model=EmailVerificationResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing wallet address"}},
    summary="Verify email ownership",
    description="True only if the email is registered to the calling wallet.",
)
async def verify_email(
    email: str,
    principal: str = Depends(get_principal),
    registry: StakeRegistry = Depends(get_stake_registry),
) -> EmailVerificationResponse:
    email = canonical_email(email)
    return EmailVerificationResponse(
        email=email,
        principal=principal,
        verified=registry.verify_email(principal, email),
    )


@router.get(
    "/config/min-stake-duration",
    response_model=MinStakeDurationResponse,
    summary="Get minimum stake duration",
)
async def get_min_stake_duration(
    registry: StakeRegistry = Depends(get_stake_registry),
) -> MinStakeDurationResponse:
    return MinStakeDurationResponse(seconds=registry.min_stake_duration())


@router.put(
    "/config/min-stake-duration",
    response_model=MinStakeDurationResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Missing wallet address"},
        403: {"model": ErrorResponse, "description": "Caller is not the admin"},
        422: {"description": "Validation error"},
    },
    summary="Update minimum stake duration",
    description="Admin only. Applies immediately, including to existing stakes.",
)
async def update_min_stake_duration(
    request_data: MinStakeDurationRequest,
    principal: str = Depends(get_principal),
    registry: StakeRegistry = Depends(get_stake_registry),
) -> MinStakeDurationResponse:
    try:
        registry.update_min_stake_duration(principal, request_data.seconds)
    except Unauthorized as exc:
        raise _http_error(exc) from None
    return MinStakeDurationResponse(seconds=request_data.seconds)
