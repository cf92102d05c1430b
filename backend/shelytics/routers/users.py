from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shelytics.database import get_db
from shelytics.schemas.user import (
    EmergencyContactCreate,
    EmergencyContactSchema,
    ProfileCreate,
    ProfileSchema,
    UserPreferencesSchema,
    UserPreferencesUpdate,
)
from shelytics.services import store

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/profile", response_model=ProfileSchema)
async def get_profile(user_id: str, db: Session = Depends(get_db)):
    profile = store.get_profile(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail=f"No profile for user {user_id}")
    return profile


@router.post("/{user_id}/profile", response_model=ProfileSchema)
async def save_profile(user_id: str, body: ProfileCreate, db: Session = Depends(get_db)):
    """Create or replace the user's profile."""
    return store.upsert_profile(db, user_id, body)


@router.get("/{user_id}/contacts", response_model=list[EmergencyContactSchema])
async def list_contacts(user_id: str, db: Session = Depends(get_db)):
    """Emergency contacts, primary first."""
    return store.get_contacts(db, user_id)


@router.post("/{user_id}/contacts", response_model=EmergencyContactSchema, status_code=201)
async def add_contact(user_id: str, body: EmergencyContactCreate, db: Session = Depends(get_db)):
    return store.create_contact(db, user_id, body)


@router.get("/{user_id}/preferences", response_model=UserPreferencesSchema)
async def get_preferences(user_id: str, db: Session = Depends(get_db)):
    prefs = store.get_preferences(db, user_id)
    if not prefs:
        raise HTTPException(status_code=404, detail=f"No preferences saved for user {user_id}")
    return prefs


@router.put("/{user_id}/preferences", response_model=UserPreferencesSchema)
async def update_preferences(
    user_id: str, body: UserPreferencesUpdate, db: Session = Depends(get_db),
):
    return store.update_preferences(db, user_id, body)
