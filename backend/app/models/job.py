from sqlalchemy import JSON, Boolean, Column, ForeignKey, Table, Text
from sqlalchemy.orm import relationship
from app.database import Base

job_posting_addons = Table(
    "job_posting_addons",
    Base.metadata,
    Column("job_id", Text, ForeignKey("job_postings.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Text, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)


class JobPosting(Base):
    __tablename__ = "job_postings"

    id = Column(Text, primary_key=True)
    business_user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text)
    benefits = Column(Text)
    compensation_type = Column(Text, nullable=False)
    salary_range = Column(Text)
    hourly_rate = Column(Text)
    contact_email = Column(Text)
    application_url = Column(Text)
    featured = Column(Boolean, nullable=False, default=False)
    tags = Column(JSON, nullable=False, default=list)
    status = Column(Text, nullable=False, default="active")
    plan = Column(Text, nullable=False)
    plan_code = Column(Text)
    plan_id = Column(Text, ForeignKey("products.id"))
    addons = Column(JSON, nullable=False, default=list)
    expires_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    business_user = relationship("User", back_populates="job_postings")
    plan_product = relationship("Product", foreign_keys=[plan_id])
    addon_products = relationship("Product", secondary=job_posting_addons, order_by="Product.sort_order")
