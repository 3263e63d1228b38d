from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.repositories.products import ProductRepository
from app.services.auth_service import auth_service
from app.services.job_posting_service import JobPostingService
from app.services.pricing_service import PricingService, price_cache


async def require_token(authorization: str | None = Header(None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return authorization[7:]


async def get_current_user(
    token: str = Depends(require_token),
    db: Session = Depends(get_db),
) -> User:
    user_id = auth_service.resolve_token(token)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Session expired or invalid token")
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        auth_service.logout(token)
        raise HTTPException(status_code=401, detail="User no longer exists")
    return user


async def require_business_user(user: User = Depends(get_current_user)) -> User:
    if not user.is_business:
        raise HTTPException(status_code=403, detail="Business account required")
    return user


def get_pricing_service(db: Session = Depends(get_db)) -> PricingService:
    return PricingService(ProductRepository(db), price_cache)


def get_job_posting_service(db: Session = Depends(get_db)) -> JobPostingService:
    return JobPostingService(db)
