from fastapi import APIRouter, Depends

from notes_backend.api.deps import current_user
from notes_backend.api.schemas import ProfileResponse, UserProfile

router = APIRouter(prefix="/user", tags=["User"])


# PUBLIC_INTERFACE
@router.get("/profile", response_model=ProfileResponse, summary="Get current user profile")
def get_profile(user=Depends(current_user)):
    """
    Get details about the authenticated user.
    """
    return ProfileResponse(user=UserProfile.model_validate(user))
