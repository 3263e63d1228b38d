import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.orm import Session

from app.models.job import JobPosting
from app.models.product import ADDON, PLAN
from app.repositories.job_postings import JobPostingRepository
from app.repositories.products import ProductRepository
from app.services.addon_codes import EXTEND_POST_ADDON, normalize_addon_code
from app.services.expiry_service import ExpiryCalculator
from app.utils.timestamps import format_timestamp, parse_timestamp, utcnow

logger = logging.getLogger(__name__)

# Fields the business dashboard edit form may not touch
COMMERCIAL_FIELDS = {
    "plan", "plan_code", "plan_id", "addons", "featured",
    "expires_at", "status", "business_user_id",
}

# Columns that cannot be cleared by sending null
_REQUIRED_FIELDS = {
    "title", "company", "location", "type", "description", "compensation_type",
    "featured", "tags", "status", "plan", "addons",
}


def _drop_null_required(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None or k not in _REQUIRED_FIELDS}


def _clear_unused_compensation(changes: dict):
    # salary_range and hourly_rate are mutually exclusive
    compensation_type = changes.get("compensation_type")
    if compensation_type is None:
        return
    if compensation_type != "salary":
        changes["salary_range"] = None
    if compensation_type != "hourly":
        changes["hourly_rate"] = None


@dataclass
class LinkageStatus:
    """Outcome of linking a job to catalog rows. Linkage never fails the request."""

    attempted: bool = True
    plan_linked: bool = False
    plan_id: str | None = None
    linked_addons: list[str] = field(default_factory=list)
    skipped_addons: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def complete(self) -> bool:
        return self.error is None and self.plan_linked and not self.skipped_addons


@dataclass
class JobPostingResult:
    job: JobPosting
    linkage: LinkageStatus


class JobPostingService:
    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.jobs = JobPostingRepository(db)
        self.products = ProductRepository(db)
        self.expiry = ExpiryCalculator(self.products)
        self._clock = clock

    def _apply_plan(self, job_data: dict, plan: str, addons: list[str], now: datetime):
        # Assigning a plan restarts the listing clock and reactivates the job
        result = self.expiry.compute(plan, addons, now)
        job_data["expires_at"] = format_timestamp(result.expires_at)
        job_data["status"] = "active"
        job_data["plan_code"] = plan

    def create(self, business_user_id: str, data: dict) -> JobPostingResult:
        now = self._clock()
        now_str = format_timestamp(now)
        job_data = dict(data)
        job_data["addons"] = list(job_data.get("addons") or [])
        job_data["plan_code"] = job_data["plan"]

        if job_data.get("expires_at"):
            job_data["expires_at"] = format_timestamp(job_data["expires_at"])
        else:
            self._apply_plan(job_data, job_data["plan"], job_data["addons"], now)

        job = JobPosting(
            id=str(uuid.uuid4()),
            business_user_id=business_user_id,
            created_at=now_str,
            updated_at=now_str,
            **job_data,
        )
        job = self.jobs.create(job)

        linkage = self._link_catalog(job, link_plan=True, addons=job.addons)
        self.db.refresh(job)
        return JobPostingResult(job=job, linkage=linkage)

    def update(self, job: JobPosting, data: dict) -> JobPostingResult:
        now = self._clock()
        changes = _drop_null_required(data)
        if changes.get("expires_at"):
            changes["expires_at"] = format_timestamp(changes["expires_at"])
        if "addons" in changes:
            changes["addons"] = list(changes["addons"] or [])
        _clear_unused_compensation(changes)

        new_plan = changes.get("plan")
        plan_changed = new_plan is not None and new_plan != job.plan
        if plan_changed:
            changes["plan_id"] = None
            self._apply_plan(changes, new_plan, changes.get("addons", job.addons), now)
        elif "addons" in changes and "expires_at" not in changes:
            self._shift_for_extend_post(job, changes)
        changes["updated_at"] = format_timestamp(now)

        job = self.jobs.update(job, changes)

        addons_changed = "addons" in changes
        if plan_changed or addons_changed:
            linkage = self._link_catalog(
                job,
                link_plan=plan_changed,
                addons=job.addons if addons_changed else None,
                replace=True,
            )
            self.db.refresh(job)
        else:
            linkage = LinkageStatus(attempted=False, plan_linked=job.plan_id is not None, plan_id=job.plan_id)
        return JobPostingResult(job=job, linkage=linkage)

    def _shift_for_extend_post(self, job: JobPosting, changes: dict):
        # Adding or dropping extend-post moves expiry without restarting the plan clock
        had = EXTEND_POST_ADDON in (job.addons or [])
        has = EXTEND_POST_ADDON in changes["addons"]
        if had == has or not job.expires_at:
            return
        days = self.expiry.extend_days if has else -self.expiry.extend_days
        changes["expires_at"] = format_timestamp(parse_timestamp(job.expires_at) + timedelta(days=days))
        logger.info("Shifted expiry of job %s by %+d days for %r add-on", job.id, days, EXTEND_POST_ADDON)

    def edit_listing(self, job: JobPosting, data: dict) -> JobPosting:
        changes = {k: v for k, v in _drop_null_required(data).items() if k not in COMMERCIAL_FIELDS}
        _clear_unused_compensation(changes)
        changes["updated_at"] = format_timestamp(self._clock())
        return self.jobs.update(job, changes)

    def list_public(self, featured: bool | None = None, limit: int | None = None, offset: int = 0) -> list[JobPosting]:
        return self.jobs.find_many(
            featured=featured,
            live_at=format_timestamp(self._clock()),
            limit=limit,
            offset=offset,
        )

    def list_for_business(self, business_user_id: str, status: str | None = None) -> list[JobPosting]:
        return self.jobs.find_many(business_user_id=business_user_id, status=status)

    def expire_overdue(self) -> int:
        count = self.jobs.expire_overdue(format_timestamp(self._clock()))
        if count:
            logger.info("Marked %d job postings as expired", count)
        return count

    def _link_catalog(
        self,
        job: JobPosting,
        link_plan: bool,
        addons: list[str] | None,
        replace: bool = False,
    ) -> LinkageStatus:
        status = LinkageStatus(plan_id=job.plan_id, plan_linked=job.plan_id is not None)
        try:
            if link_plan:
                self._link_plan(job, status)
            if addons is not None:
                self._link_addons(job, addons, status, replace)
        except Exception as exc:
            self.db.rollback()
            logger.error("Error linking job posting %s to catalog products: %s", job.id, exc)
            status.error = str(exc)
        return status

    def _link_plan(self, job: JobPosting, status: LinkageStatus):
        plan_product = self.products.find_active(job.plan, PLAN)
        if plan_product is None:
            logger.warning("Plan %r not found in catalog; job %s left without plan_id", job.plan, job.id)
            status.plan_linked = False
            status.plan_id = None
            return
        self.jobs.update_plan_id(job.id, plan_product.id)
        status.plan_linked = True
        status.plan_id = plan_product.id
        logger.info("Linked job %s to plan product %s (%s)", job.id, plan_product.id, job.plan)

    def _link_addons(self, job: JobPosting, addons: list[str], status: LinkageStatus, replace: bool):
        by_code = {p.code: p for p in self.products.list_active(ADDON)}
        wanted: dict[str, str] = {}
        for code in addons:
            lookup = normalize_addon_code(code)
            product = by_code.get(lookup)
            if product is None:
                if lookup == EXTEND_POST_ADDON:
                    continue  # applied to expires_at, no catalog row required
                logger.warning("Add-on product %r not found; job %s not linked to it", lookup, job.id)
                status.skipped_addons.append(code)
                continue
            wanted.setdefault(lookup, product.id)

        if replace:
            self.jobs.remove_addon_links(job.id, keep_product_ids=set(wanted.values()))
        for lookup, product_id in wanted.items():
            self.jobs.add_addon_link(job.id, product_id)
            status.linked_addons.append(lookup)
