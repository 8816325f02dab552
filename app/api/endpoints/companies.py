from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import CurrentUser, get_admin_user
from app.crud import company as company_crud
from app.schemas.company import CompanyCreateRequest, CompanyResponse, CompanyUpdateRequest

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=CompanyResponse)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    """Create a company. Admin only."""
    return company_crud.create(db, request.model_dump(by_alias=True))


@router.get("/", response_model=List[CompanyResponse])
def list_companies(
    min_employees: Optional[int] = Query(None, ge=0, alias="minEmployees"),
    max_employees: Optional[int] = Query(None, ge=0, alias="maxEmployees"),
    name: Optional[str] = Query(None, min_length=1),
    db: Session = Depends(get_db),
):
    """
    List companies ordered by name.

    Args:
        minEmployees: Minimum number of employees
        maxEmployees: Maximum number of employees (must not be below minEmployees)
        name: Case-insensitive substring of the company name
    """
    return company_crud.find_all(
        db,
        min_employees=min_employees,
        max_employees=max_employees,
        name=name,
    )


@router.get("/{handle}", response_model=CompanyResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company by handle."""
    return company_crud.get(db, handle)


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    """
    Partially update a company. Admin only.

    Only the fields present in the body are changed; an empty body is a 400.
    """
    return company_crud.update(db, handle, request.model_dump(by_alias=True, exclude_unset=True))


@router.delete("/{handle}", status_code=status.HTTP_204_NO_CONTENT)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    """Delete a company and its jobs. Admin only."""
    company_crud.remove(db, handle)
    return None
