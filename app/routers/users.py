from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..models.user import User
from ..repositories import UserRepository
from ..schemas.user import UserResponse, UserSearchResponse
from ..services.user_service import UserService
from ..utils.dependencies import get_current_user, get_search_caller

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/me", response_model=UserResponse)
@router.get("/me/", response_model=UserResponse)
def get_current_user_profile(
    current_user: User = Depends(get_current_user)
):
    """الحصول على بيانات المستخدم الحالي"""
    return UserRepository.to_response(current_user)


@router.get("/search", response_model=UserSearchResponse)
@router.get("/search/", response_model=UserSearchResponse)
def search_users(
    query: Optional[str] = Query(None, description="Substring of full name, username or email"),
    db: Session = Depends(get_db),
    caller: Optional[User] = Depends(get_search_caller)
):
    """البحث عن المستخدمين - قائمة فارغة عند عدم إرسال نص البحث"""
    return {"users": UserService(db).search(query)}
