"""Auth and registration endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from legacy_vault.core.deps import ADMIN_ROLE, get_current_principal, get_current_user, principal_from_payload
from legacy_vault.core.principal import AdministratorPrincipal, Principal
from legacy_vault.core.security import REFRESH, create_token_pair, decode_token
from legacy_vault.db.session import get_db
from legacy_vault.models.user import User
from legacy_vault.schemas.auth import (
    AdminMe,
    LoginRequest,
    RefreshRequest,
    RegistrationResponse,
    RegistrationStep1Request,
    RegistrationStep1Response,
    RegistrationStep2Request,
    TokenResponse,
    UpdateProfileRequest,
    UserMe,
)
from legacy_vault.services.auth_service import authenticate, update_profile
from legacy_vault.services.registration_service import complete_registration, start_registration

router = APIRouter(prefix="/auth", tags=["auth"])


def _client_info(request: Request) -> tuple[str | None, str | None]:
    """Caller address and user agent for the audit log."""
    host = request.client.host if request.client else None
    return host, request.headers.get("user-agent")


def _tokens_for(principal: Principal) -> TokenResponse:
    if isinstance(principal, AdministratorPrincipal):
        return TokenResponse(**create_token_pair(principal.email, {"role": ADMIN_ROLE}), is_admin=True)
    return TokenResponse(**create_token_pair(principal.user_id))


@router.post("/register/step1", response_model=RegistrationStep1Response)
async def register_step1(
    data: RegistrationStep1Request,
    db: Session = Depends(get_db),
):
    """Store identity/contact details and return a short-lived registration token."""
    token, expires_at = await start_registration(db, data)
    return RegistrationStep1Response(registration_token=token, expires_at=expires_at)


@router.post("/register/step2", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_step2(
    data: RegistrationStep2Request,
    request: Request,
    db: Session = Depends(get_db),
):
    """Complete registration with email + password and return tokens."""
    ip_address, user_agent = _client_info(request)
    user = await complete_registration(db, data, ip_address=ip_address, user_agent=user_agent)
    tokens = create_token_pair(user.id)
    return RegistrationResponse(**tokens, user=UserMe.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login(
    data: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Login with email or mobile number and return access + refresh tokens."""
    ip_address, user_agent = _client_info(request)
    principal = authenticate(db, data.identifier, data.password, ip_address=ip_address, user_agent=user_agent)
    return _tokens_for(principal)


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    data: RefreshRequest,
    db: Session = Depends(get_db),
):
    """Exchange a refresh token for a new token pair."""
    payload = decode_token(data.refresh_token, REFRESH)
    if not payload or "sub" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )
    return _tokens_for(principal_from_payload(db, payload))


@router.get("/me", response_model=UserMe | AdminMe)
def me(principal: Principal = Depends(get_current_principal)):
    """Get the current principal."""
    if isinstance(principal, AdministratorPrincipal):
        return AdminMe(email=principal.email, full_name=principal.full_name)
    return UserMe.model_validate(principal.user)


@router.put("/me", response_model=UserMe)
def update_me(
    data: UpdateProfileRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update current user's profile."""
    return update_profile(db, current_user, data)
