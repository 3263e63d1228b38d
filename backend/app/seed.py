"""
Default plan and add-on catalog.

Run ``python -m app.seed`` to create the database and load the catalog. Seeding
is skipped when any product already exists.
"""
import logging
import uuid

from sqlalchemy.orm import Session

from app.models.product import ADDON, PLAN, Product
from app.repositories.products import ProductRepository
from app.utils.timestamps import format_timestamp, utcnow

logger = logging.getLogger(__name__)

DEFAULT_PRODUCTS = [
    {
        "code": "basic",
        "name": "Basic",
        "description": "Basic job listing for 15 days",
        "type": PLAN,
        "price": "0.00",
        "sort_order": 1,
        "features": ["15-day listing", "Basic visibility", "Standard search placement"],
    },
    {
        "code": "standard",
        "name": "Standard",
        "description": "Standard job listing for 30 days",
        "type": PLAN,
        "price": "20.00",
        "sort_order": 2,
        "features": ["30-day listing", "Enhanced visibility", "Higher search placement", "Email notifications"],
    },
    {
        "code": "featured",
        "name": "Featured",
        "description": "Featured job listing for 30 days with priority placement",
        "type": PLAN,
        "price": "50.00",
        "sort_order": 3,
        "features": ["30-day listing", "Premium visibility", "Top search placement", "Featured label", "Homepage highlight"],
    },
    {
        "code": "unlimited",
        "name": "Unlimited",
        "description": "Premium job listing for 90 days with maximum exposure",
        "type": PLAN,
        "price": "150.00",
        "sort_order": 4,
        "features": [
            "90-day listing", "Maximum visibility", "Top search placement",
            "Featured label", "Homepage highlight", "Social media promotion",
        ],
    },
    {
        "code": "highlighted",
        "name": "Highlighted Listing",
        "description": "Make your listing stand out with a highlight",
        "type": ADDON,
        "price": "10.00",
        "sort_order": 10,
        "features": ["Colored highlight border", "Increased visibility"],
    },
    {
        "code": "top-of-search",
        "name": "Top of Search Results",
        "description": "Priority placement in search results for 14 days",
        "type": ADDON,
        "price": "25.00",
        "sort_order": 11,
        "features": ["Priority search placement", "14-day boost"],
    },
    {
        "code": "social-media-promotion",
        "name": "Social Media Promotion",
        "description": "Promote your job on our social media channels",
        "type": ADDON,
        "price": "20.00",
        "sort_order": 12,
        "features": ["Facebook post", "Twitter post", "LinkedIn post"],
    },
    {
        "code": "resume-access",
        "name": "Resume Database Access",
        "description": "Access all resumes for 30 days",
        "type": ADDON,
        "price": "15.00",
        "sort_order": 13,
        "features": ["Browse resumes", "Contact candidates directly", "30-day access"],
    },
    {
        "code": "urgent",
        "name": "Urgent Hiring",
        "description": 'Mark as "Urgent Hiring" with special badge',
        "type": ADDON,
        "price": "15.00",
        "sort_order": 14,
        "features": ["Urgent badge", "Increased visibility"],
    },
]


def seed_products(db: Session, products: list[dict] | None = None) -> int:
    repo = ProductRepository(db)
    existing = repo.count()
    if existing:
        logger.info("Found %d existing products; skipping seed", existing)
        return 0

    now = format_timestamp(utcnow())
    rows = products if products is not None else DEFAULT_PRODUCTS
    for row in rows:
        repo.add(Product(id=str(uuid.uuid4()), active=True, created_at=now, updated_at=now, **row))
        logger.info("Added %s: %s", row["type"], row["name"])
    db.commit()
    return len(rows)


def main():
    from app.database import SessionLocal, init_db
    from app.utils.filesystem import ensure_data_dir

    logging.basicConfig(level=logging.INFO)
    ensure_data_dir()
    init_db()
    db = SessionLocal()
    try:
        seed_products(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
