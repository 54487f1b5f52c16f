from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.user import RegisterRequest, LoginRequest, Token, UserResponse
from ..services.user_service import UserService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@router.post("/register/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db)
):
    """إنشاء حساب جديد"""
    return UserService(db).register(data)


@router.post("/login", response_model=Token)
@router.post("/login/", response_model=Token)
def login(
    data: LoginRequest,
    db: Session = Depends(get_db)
):
    """تسجيل الدخول والحصول على رمز الوصول"""
    return UserService(db).authenticate(data.username, data.password)
