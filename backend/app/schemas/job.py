from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

JobStatus = Literal["pending", "active", "paused", "draft", "closed", "expired", "deleted"]
CompensationType = Literal["salary", "hourly", "undisclosed"]


def check_compensation(compensation_type, salary_range, hourly_rate):
    if compensation_type is None:
        return
    if compensation_type != "salary" and salary_range:
        raise ValueError("salary_range is only allowed with salary compensation")
    if compensation_type != "hourly" and hourly_rate:
        raise ValueError("hourly_rate is only allowed with hourly compensation")


class _CompensationMixin(BaseModel):
    @field_validator("compensation_type", mode="before", check_fields=False)
    @classmethod
    def _lower_compensation(cls, value):
        return value.lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _exclusive_compensation(self):
        check_compensation(self.compensation_type, self.salary_range, self.hourly_rate)
        return self


class JobPostingCreate(_CompensationMixin):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    type: str = Field(min_length=1)
    description: str = Field(min_length=1)
    requirements: str | None = None
    benefits: str | None = None
    compensation_type: CompensationType
    salary_range: str | None = None
    hourly_rate: str | None = None
    contact_email: str | None = None
    application_url: str | None = None
    featured: bool = False
    tags: list[str] = []
    status: JobStatus = "active"
    plan: str = Field(min_length=1)
    addons: list[str] = []
    expires_at: datetime | None = None


class JobPostingUpdate(_CompensationMixin):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    type: str | None = None
    description: str | None = None
    requirements: str | None = None
    benefits: str | None = None
    compensation_type: CompensationType | None = None
    salary_range: str | None = None
    hourly_rate: str | None = None
    contact_email: str | None = None
    application_url: str | None = None
    featured: bool | None = None
    tags: list[str] | None = None
    status: JobStatus | None = None
    plan: str | None = Field(default=None, min_length=1)
    addons: list[str] | None = None
    expires_at: datetime | None = None


class LinkageResponse(BaseModel):
    attempted: bool
    complete: bool
    plan_linked: bool
    plan_id: str | None
    linked_addons: list[str]
    skipped_addons: list[str]
    error: str | None


class JobPostingResponse(BaseModel):
    id: str
    business_user_id: str
    title: str
    company: str
    location: str
    type: str
    description: str
    requirements: str | None
    benefits: str | None
    compensation_type: str
    salary_range: str | None
    hourly_rate: str | None
    contact_email: str | None
    application_url: str | None
    featured: bool
    tags: list[str] = []
    status: str
    plan: str
    plan_code: str | None
    plan_id: str | None
    addons: list[str] = []
    addon_products: list[str] = []
    expires_at: str | None
    created_at: str
    updated_at: str
    linkage: LinkageResponse | None = None
