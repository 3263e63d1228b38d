from fastapi import APIRouter, Depends

from app.dependencies import get_job_posting_service, require_business_user
from app.models.user import User
from app.routers.jobs import check_stored_compensation, get_owned_job, job_to_response
from app.schemas.job import JobPostingResponse, JobPostingUpdate, JobStatus
from app.services.job_posting_service import JobPostingService

router = APIRouter(prefix="/business/jobs", tags=["business"])


@router.get("", response_model=list[JobPostingResponse])
async def list_business_jobs(
    status: JobStatus | None = None,
    user: User = Depends(require_business_user),
    service: JobPostingService = Depends(get_job_posting_service),
):
    return [job_to_response(j) for j in service.list_for_business(user.id, status=status)]


@router.get("/{job_id}", response_model=JobPostingResponse)
async def get_business_job(
    job_id: str,
    user: User = Depends(require_business_user),
    service: JobPostingService = Depends(get_job_posting_service),
):
    return job_to_response(get_owned_job(job_id, user, service))


@router.put("/{job_id}", response_model=JobPostingResponse)
async def edit_business_job(
    job_id: str,
    req: JobPostingUpdate,
    user: User = Depends(require_business_user),
    service: JobPostingService = Depends(get_job_posting_service),
):
    """Edit listing text only. Plan, add-ons, status and expiry are ignored here."""
    job = get_owned_job(job_id, user, service)
    data = req.model_dump(exclude_unset=True)
    check_stored_compensation(job, data)
    return job_to_response(service.edit_listing(job, data))
