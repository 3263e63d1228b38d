from app.models.user import User
from app.models.product import Product
from app.models.job import JobPosting, job_posting_addons

__all__ = ["User", "Product", "JobPosting", "job_posting_addons"]
