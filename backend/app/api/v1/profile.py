from fastapi import APIRouter
from sqlalchemy import select

from app.api.deps import CurrentUser, DbSession
from app.models import Profile, User
from app.schemas.enums import ActivityLevel, Gender
from app.schemas.profile import ProfileResponse, ProfileUpdate

router = APIRouter()

# Profile created on first access
DEFAULT_PROFILE = {
    "name": "User",
    "age": 25,
    "gender": Gender.MALE.value,
    "height_cm": 170.0,
    "activity_level": ActivityLevel.MODERATE.value,
}


def _profile_response(profile: Profile, user: User) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        user_id=profile.user_id,
        name=profile.name,
        age=profile.age,
        gender=profile.gender,
        height_cm=profile.height_cm,
        activity_level=profile.activity_level,
        username=user.username,
        email=user.email,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


async def _get_profile(db: DbSession, user: User) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.user_id == user.id))
    return result.scalar_one_or_none()


@router.get("", response_model=ProfileResponse)
async def get_profile(
    current_user: CurrentUser,
    db: DbSession,
) -> ProfileResponse:
    """Get the user's profile, creating the default one on first access."""
    profile = await _get_profile(db, current_user)

    if not profile:
        profile = Profile(user_id=current_user.id, **DEFAULT_PROFILE)
        db.add(profile)
        await db.commit()
        await db.refresh(profile)

    return _profile_response(profile, current_user)


@router.put("", response_model=ProfileResponse)
async def update_profile(
    profile_update: ProfileUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ProfileResponse:
    """Update only the provided profile fields."""
    profile = await _get_profile(db, current_user)

    if not profile:
        profile = Profile(user_id=current_user.id, **DEFAULT_PROFILE)
        db.add(profile)

    update_data = profile_update.model_dump(exclude_unset=True, exclude_none=True)

    for field, value in update_data.items():
        if field in ("gender", "activity_level"):
            setattr(profile, field, value.value)
        else:
            setattr(profile, field, value)

    await db.commit()
    await db.refresh(profile)
    return _profile_response(profile, current_user)
