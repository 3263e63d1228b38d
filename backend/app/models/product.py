from decimal import Decimal

from sqlalchemy import JSON, Boolean, Column, Integer, Text
from app.database import Base

PLAN = "plan"
ADDON = "addon"


class Product(Base):
    __tablename__ = "products"

    id = Column(Text, primary_key=True)
    code = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    type = Column(Text, nullable=False)
    # Stored as decimal text so prices survive SQLite without float rounding
    price = Column(Text, nullable=False, default="0.00")
    active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    features = Column(JSON, nullable=False, default=list)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    @property
    def unit_price(self) -> Decimal:
        return Decimal(self.price)
