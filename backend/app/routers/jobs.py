from fastapi import APIRouter, Depends, HTTPException, Query

from app.dependencies import get_job_posting_service, require_business_user
from app.models.job import JobPosting
from app.models.user import User
from app.schemas.job import (
    JobPostingCreate,
    JobPostingResponse,
    JobPostingUpdate,
    LinkageResponse,
    check_compensation,
)
from app.services.job_posting_service import JobPostingService, LinkageStatus

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _linkage_to_response(linkage: LinkageStatus) -> LinkageResponse:
    return LinkageResponse(
        attempted=linkage.attempted,
        complete=linkage.complete,
        plan_linked=linkage.plan_linked,
        plan_id=linkage.plan_id,
        linked_addons=linkage.linked_addons,
        skipped_addons=linkage.skipped_addons,
        error=linkage.error,
    )


def job_to_response(job: JobPosting, linkage: LinkageStatus | None = None) -> JobPostingResponse:
    return JobPostingResponse(
        id=job.id,
        business_user_id=job.business_user_id,
        title=job.title,
        company=job.company,
        location=job.location,
        type=job.type,
        description=job.description,
        requirements=job.requirements,
        benefits=job.benefits,
        compensation_type=job.compensation_type,
        salary_range=job.salary_range,
        hourly_rate=job.hourly_rate,
        contact_email=job.contact_email,
        application_url=job.application_url,
        featured=job.featured,
        tags=job.tags or [],
        status=job.status,
        plan=job.plan,
        plan_code=job.plan_code,
        plan_id=job.plan_id,
        addons=job.addons or [],
        addon_products=[p.code for p in job.addon_products],
        expires_at=job.expires_at,
        created_at=job.created_at,
        updated_at=job.updated_at,
        linkage=_linkage_to_response(linkage) if linkage else None,
    )


def get_owned_job(job_id: str, user: User, service: JobPostingService) -> JobPosting:
    job = service.jobs.get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job posting not found")
    if job.business_user_id != user.id:
        raise HTTPException(status_code=403, detail="Not authorized to modify this job posting")
    return job


def check_stored_compensation(job: JobPosting, data: dict):
    compensation_type = data.get("compensation_type") or job.compensation_type
    try:
        check_compensation(compensation_type, data.get("salary_range"), data.get("hourly_rate"))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("", response_model=JobPostingResponse, status_code=201)
async def create_job(
    req: JobPostingCreate,
    user: User = Depends(require_business_user),
    service: JobPostingService = Depends(get_job_posting_service),
):
    result = service.create(user.id, req.model_dump())
    return job_to_response(result.job, result.linkage)


@router.get("", response_model=list[JobPostingResponse])
async def list_jobs(
    featured: bool | None = None,
    limit: int | None = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: JobPostingService = Depends(get_job_posting_service),
):
    jobs = service.list_public(featured=featured, limit=limit, offset=offset)
    return [job_to_response(j) for j in jobs]


@router.get("/{job_id}", response_model=JobPostingResponse)
async def get_job(job_id: str, service: JobPostingService = Depends(get_job_posting_service)):
    job = service.jobs.get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job posting not found")
    return job_to_response(job)


@router.put("/{job_id}", response_model=JobPostingResponse)
async def update_job(
    job_id: str,
    req: JobPostingUpdate,
    user: User = Depends(require_business_user),
    service: JobPostingService = Depends(get_job_posting_service),
):
    job = get_owned_job(job_id, user, service)
    data = req.model_dump(exclude_unset=True)
    check_stored_compensation(job, data)
    result = service.update(job, data)
    return job_to_response(result.job, result.linkage)


@router.delete("/{job_id}")
async def delete_job(
    job_id: str,
    user: User = Depends(require_business_user),
    service: JobPostingService = Depends(get_job_posting_service),
):
    job = get_owned_job(job_id, user, service)
    service.jobs.delete(job)
    return {"success": True}
