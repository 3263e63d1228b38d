from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user, require_token
from app.models.user import User
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, ThrottleResponse, UserResponse
from app.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
    )


@router.post("/register", response_model=LoginResponse, status_code=201)
async def register(req: RegisterRequest, db: Session = Depends(get_db)):
    user = auth_service.register(
        db,
        email=req.email,
        password=req.password,
        role=req.role,
        first_name=req.first_name,
        last_name=req.last_name,
    )
    if user is None:
        raise HTTPException(status_code=409, detail="User already exists with this email")
    return LoginResponse(**auth_service.issue_token(user))


@router.post("/login", response_model=LoginResponse | ThrottleResponse)
async def login(req: LoginRequest, request: Request, db: Session = Depends(get_db)):
    client_host = request.client.host if request.client else "unknown"
    result = auth_service.login(db, req.email, req.password, throttle_key=f"login:{client_host}")
    if result is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if "error" in result:
        raise HTTPException(status_code=429, detail=result)
    return LoginResponse(**result)


@router.post("/logout")
async def logout(token: str = Depends(require_token)):
    auth_service.logout(token)
    return {"message": "Logged out"}


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return _user_to_response(user)
