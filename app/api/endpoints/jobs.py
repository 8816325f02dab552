import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import CurrentUser, get_admin_user
from app.crud import job as job_crud
from app.schemas.job import JobCreateRequest, JobResponse, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    """
    Create a job for an existing company. Admin only.

    Returns the stored job including its generated id.
    """
    new_job = job_crud.create(db, request.model_dump(mode="json", by_alias=True))
    logger.info(f"Created job {new_job['id']}: {new_job['title']} (by {admin.username})")
    return new_job


@router.get("/", response_model=List[JobResponse])
def list_jobs(
    title: Optional[str] = Query(None, min_length=1),
    min_salary: Optional[int] = Query(None, ge=0, alias="minSalary"),
    max_salary: Optional[int] = Query(None, ge=0, alias="maxSalary"),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    company_handle: Optional[str] = Query(None, alias="companyHandle"),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by title.

    Args:
        title: Case-insensitive substring of the title
        minSalary / maxSalary: Salary bounds (minSalary must not exceed maxSalary)
        hasEquity: If true, only jobs offering equity
        companyHandle: Only this company's jobs
    """
    return job_crud.find_all(
        db,
        title=title,
        min_salary=min_salary,
        max_salary=max_salary,
        has_equity=has_equity,
        company_handle=company_handle,
    )


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    return job_crud.get(db, job_id)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    """Partially update a job's title, salary or equity. Admin only."""
    return job_crud.update(db, job_id, request.model_dump(mode="json", exclude_unset=True))


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    """
    Delete a job by ID. Admin only.
    """
    job_crud.remove(db, job_id)
    return None
