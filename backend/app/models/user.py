from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship
from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Text, primary_key=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    first_name = Column(Text)
    last_name = Column(Text)
    role = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    job_postings = relationship("JobPosting", back_populates="business_user", cascade="all, delete-orphan")

    @property
    def is_business(self) -> bool:
        return self.role == "business"
