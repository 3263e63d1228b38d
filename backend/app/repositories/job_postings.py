from sqlalchemy import or_
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.models.job import JobPosting, job_posting_addons


class JobPostingRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, job: JobPosting) -> JobPosting:
        self.db.add(job)
        self.db.commit()
        self.db.refresh(job)
        return job

    def get(self, job_id: str) -> JobPosting | None:
        return self.db.query(JobPosting).filter(JobPosting.id == job_id).first()

    def find_many(
        self,
        business_user_id: str | None = None,
        status: str | None = None,
        featured: bool | None = None,
        live_at: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[JobPosting]:
        query = self.db.query(JobPosting)
        if business_user_id:
            query = query.filter(JobPosting.business_user_id == business_user_id)
        if status:
            query = query.filter(JobPosting.status == status)
        if featured is not None:
            query = query.filter(JobPosting.featured.is_(featured))
        if live_at:
            # Timestamps are fixed-width UTC text, so string order is time order
            query = query.filter(
                JobPosting.status == "active",
                or_(JobPosting.expires_at.is_(None), JobPosting.expires_at > live_at),
            )
        query = query.order_by(JobPosting.created_at.desc(), JobPosting.id)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def update(self, job: JobPosting, changes: dict) -> JobPosting:
        for key, value in changes.items():
            setattr(job, key, value)
        self.db.commit()
        self.db.refresh(job)
        return job

    def update_plan_id(self, job_id: str, product_id: str) -> None:
        self.db.query(JobPosting).filter(JobPosting.id == job_id).update(
            {JobPosting.plan_id: product_id}, synchronize_session=False
        )
        self.db.commit()

    def add_addon_link(self, job_id: str, product_id: str) -> bool:
        """Link a job to an add-on product. Returns False if the link already existed."""
        stmt = (
            sqlite_insert(job_posting_addons)
            .values(job_id=job_id, product_id=product_id)
            .on_conflict_do_nothing()
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount > 0

    def remove_addon_links(self, job_id: str, keep_product_ids: set[str]) -> int:
        stmt = job_posting_addons.delete().where(job_posting_addons.c.job_id == job_id)
        if keep_product_ids:
            stmt = stmt.where(job_posting_addons.c.product_id.notin_(sorted(keep_product_ids)))
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount

    def addon_product_ids(self, job_id: str) -> set[str]:
        rows = self.db.execute(
            job_posting_addons.select().where(job_posting_addons.c.job_id == job_id)
        ).fetchall()
        return {row.product_id for row in rows}

    def expire_overdue(self, now: str) -> int:
        count = (
            self.db.query(JobPosting)
            .filter(
                JobPosting.status == "active",
                JobPosting.expires_at.is_not(None),
                JobPosting.expires_at <= now,
            )
            .update({JobPosting.status: "expired", JobPosting.updated_at: now}, synchronize_session=False)
        )
        self.db.commit()
        return count

    def delete(self, job: JobPosting) -> None:
        self.db.delete(job)
        self.db.commit()
