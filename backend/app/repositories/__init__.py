from app.repositories.products import ProductRepository
from app.repositories.job_postings import JobPostingRepository

__all__ = ["ProductRepository", "JobPostingRepository"]
