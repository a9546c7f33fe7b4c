"""
Profile routes shared by buyers and sellers (``/{role}/users/me``).
"""

from fastapi import APIRouter, Depends

from bilibay.api.dependencies import get_user_service, require_roles
from bilibay.models.auth import ChangePasswordRequest, MessageResponse, User, UserRole, UserUpdate
from bilibay.models.db.user import UserDB
from bilibay.services.user_service import UserService, to_profile


def build_profile_router(role: UserRole) -> APIRouter:
    """Profile endpoints gated to a single role."""
    router = APIRouter()
    current = require_roles(role)

    @router.get("/me", response_model=User)
    async def get_profile(current_user: UserDB = Depends(current)):  # noqa: B008
        return to_profile(current_user)

    @router.put("/me", response_model=User)
    async def update_profile(
        changes: UserUpdate,
        current_user: UserDB = Depends(current),  # noqa: B008
        user_service: UserService = Depends(get_user_service),  # noqa: B008
    ):
        user = await user_service.update_profile(current_user, changes)
        return to_profile(user)

    @router.post("/me/change-password", response_model=MessageResponse)
    async def change_password(
        request: ChangePasswordRequest,
        current_user: UserDB = Depends(current),  # noqa: B008
        user_service: UserService = Depends(get_user_service),  # noqa: B008
    ):
        await user_service.change_password(current_user, request.current_password, request.new_password)
        return MessageResponse(message="Password changed successfully")

    return router


buyer_router = build_profile_router(UserRole.BUYER)
seller_router = build_profile_router(UserRole.SELLER)
