from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm

from bilibay.api.dependencies import get_current_user, get_user_service
from bilibay.models.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ResetPasswordRequest,
    TokenResponse,
    User,
    UserCreate,
)
from bilibay.models.db.user import UserDB
from bilibay.services.user_service import UserService, to_profile

router = APIRouter()


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserCreate,
    user_service: UserService = Depends(get_user_service),  # noqa: B008
):
    """
    Register a buyer or seller account.

    A verification link is emailed to the new address.
    """
    user = await user_service.register(user_data)
    return to_profile(user)


@router.post("/login", response_model=TokenResponse)
async def login_with_json(
    login_data: LoginRequest,
    user_service: UserService = Depends(get_user_service),  # noqa: B008
):
    """
    Login with JSON (email and password).

    Used by the web frontend.
    """
    user = await user_service.authenticate(login_data.email, login_data.password)
    return TokenResponse(access_token=user_service.issue_token(user), user=to_profile(user))


@router.post("/token", response_model=TokenResponse)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),  # noqa: B008
    user_service: UserService = Depends(get_user_service),  # noqa: B008
):
    """
    Get an access token (OAuth2 password form, ``username`` holds the email).
    """
    user = await user_service.authenticate(form_data.username, form_data.password)
    return TokenResponse(access_token=user_service.issue_token(user), user=to_profile(user))


@router.get("/me", response_model=User)
async def get_current_user_info(current_user: UserDB = Depends(get_current_user)):  # noqa: B008
    """Get the profile of the token's owner."""
    return to_profile(current_user)


@router.get("/verify-email/{token}", response_model=MessageResponse)
async def verify_email(
    token: str,
    user_service: UserService = Depends(get_user_service),  # noqa: B008
):
    await user_service.verify_email(token)
    return MessageResponse(message="Email verified successfully")


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    user_service: UserService = Depends(get_user_service),  # noqa: B008
):
    """
    Start a password reset.

    Always answers the same way so the endpoint cannot be used to probe
    which emails have accounts.
    """
    await user_service.request_password_reset(request.email)
    return MessageResponse(message="If that email is registered, a reset link has been sent")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    user_service: UserService = Depends(get_user_service),  # noqa: B008
):
    await user_service.reset_password(request.token, request.new_password)
    return MessageResponse(message="Password has been reset")
