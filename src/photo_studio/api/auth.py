"""Authentication endpoints: registration, login and account recovery."""

from fastapi import APIRouter, Depends, Request, status

from photo_studio.api.dependencies import client_details, get_container, require_auth
from photo_studio.api.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyOtpRequest,
)
from photo_studio.api.serializers import serialize_user
from photo_studio.containers import AppContainer
from photo_studio.domain.sessions import AuthContext

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    request: Request,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a client account and return a token for it."""
    ip_address, user_agent = client_details(request)
    token, user = container.auth_service.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    return {
        "message": "User created successfully",
        "token": token,
        "user": serialize_user(user),
    }


@router.post("/login")
async def login(
    payload: LoginRequest,
    request: Request,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Exchange credentials for a bearer token."""
    ip_address, user_agent = client_details(request)
    token, user = container.auth_service.login(
        email=payload.email,
        password=payload.password,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    return {"message": "Login successful", "token": token, "user": serialize_user(user)}


@router.post("/logout")
async def logout(
    caller: AuthContext = Depends(require_auth),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.auth_service.logout(caller)
    return {"message": "Logged out successfully"}


@router.post("/forgot-password")
async def forgot_password(
    payload: ForgotPasswordRequest,
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Mail a password reset link to a registered address."""
    sent = await container.auth_service.forgot_password(payload.email)
    if sent:
        return {"message": "Password reset link sent to email"}
    return {"message": "Reset link generated (Mock)"}


@router.post("/reset-password")
async def reset_password(
    payload: ResetPasswordRequest,
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.auth_service.reset_password(payload.token, payload.new_password)
    return {"message": "Password updated"}


@router.post("/send-otp")
async def send_otp(
    caller: AuthContext = Depends(require_auth),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Mail a verification code to the caller."""
    sent = await container.auth_service.send_otp(caller.user_id)
    if sent:
        return {"message": "OTP sent"}
    return {"message": "OTP generated (Mock)"}


@router.post("/verify-otp")
async def verify_otp(
    payload: VerifyOtpRequest,
    caller: AuthContext = Depends(require_auth),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    user = container.auth_service.verify_otp(caller.user_id, payload.otp)
    return {"message": "Verified successfully", "user": serialize_user(user)}
