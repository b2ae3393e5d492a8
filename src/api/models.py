"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field, TypeAdapter, ValidationError

from src.domain.ports import Stake

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
UINT256_MAX = 2**256 - 1

_email_adapter = TypeAdapter(EmailStr)


def canonical_email(value: str) -> str:
    """
    Normalize an email the same way RegisterEmailRequest does.

    Lookups go through here so they match what registration stored
    (NFC local part, IDNA-mapped domain). A string EmailStr rejects is
    returned unchanged: it can never have been registered.
    """
    try:
        return _email_adapter.validate_python(value)
    except ValidationError:
        return value


class MintRequest(BaseModel):
    """Request model for minting a token."""

    token_id: int = Field(..., ge=0, le=UINT256_MAX, description="Unsigned token identifier")


class TokenResponse(BaseModel):
    """Response model for token ownership."""

    token_id: int
    owner: str


class StakeRequest(BaseModel):
    """Request model for direct staking."""

    token_id: int = Field(..., ge=0, le=UINT256_MAX, description="Token to stake")


class DelegateStakeRequest(BaseModel):
    """Request model for delegated staking."""

    token_id: int = Field(..., ge=0, le=UINT256_MAX, description="Token to stake")
    delegate: str = Field(
        ...,
        pattern=ADDRESS_PATTERN,
        description="Wallet address receiving delegated staking authority",
    )


class StakeResponse(BaseModel):
    """Response model for a stake record."""

    staker: str
    token_id: int
    owner: str
    delegated: bool
    delegated_wallet: str | None
    start_time: int
    eligible_at: int

    @classmethod
    def from_stake(cls, stake: Stake, eligible_at: int) -> "StakeResponse":
        return cls(
            staker=stake.staker,
            token_id=stake.token_id,
            owner=stake.owner,
            delegated=stake.delegated,
            delegated_wallet=stake.delegated_wallet,
            start_time=stake.start_time,
            eligible_at=eligible_at,
        )


class RegisterEmailRequest(BaseModel):
    """Request model for email registration."""

    email: EmailStr


class RegisterEmailResponse(BaseModel):
    """Response model for successful email registration."""

    message: str
    email: str
    principal: str


class EmailRegisteredResponse(BaseModel):
    """Response model for registration lookup."""

    email: str
    registered: bool


class EmailVerificationResponse(BaseModel):
    """Response model for ownership verification."""

    email: str
    principal: str
    verified: bool


class MinStakeDurationRequest(BaseModel):
    """Request model for updating the minimum stake duration."""

    seconds: int = Field(..., ge=0, le=UINT256_MAX, description="New duration in seconds")


class MinStakeDurationResponse(BaseModel):
    """Response model for the minimum stake duration."""

    seconds: int


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
