"""
CRUD operations for jobs.

Plain parameterized SQL over the `jobs` table. Records are dicts with
id, title, salary, equity (decimal string) and companyHandle.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.database import execute
from app.core.exceptions import InvalidInputError, InvalidReferenceError, NotFoundError
from app.core.sql import WhereClause, build_set_fragment, like_pattern

logger = logging.getLogger(__name__)

FIELD_TO_COLUMN = {
    "companyHandle": "company_handle",
}

# id and company_handle are fixed for the life of a job
UPDATABLE_COLUMNS = frozenset({"title", "salary", "equity"})

COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def _equity_to_str(value: Any) -> Optional[str]:
    """NUMERIC comes back as Decimal (PostgreSQL) or float (SQLite); expose "0.1" either way."""
    if value is None:
        return None
    return format(Decimal(str(value)).normalize(), "f")


def _to_record(row: Dict[str, Any]) -> Dict[str, Any]:
    row["equity"] = _equity_to_str(row["equity"])
    return row


def _clean_payload(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Range-check salary/equity and bind equity as a decimal string."""
    cleaned = dict(data)

    if "title" in cleaned and cleaned["title"] is None:
        raise InvalidInputError("title cannot be null")

    salary = cleaned.get("salary")
    if salary is not None and salary < 0:
        raise InvalidInputError("salary must be non-negative")

    if cleaned.get("equity") is not None:
        try:
            equity = Decimal(str(cleaned["equity"]))
        except InvalidOperation:
            raise InvalidInputError(f"Invalid equity: {cleaned['equity']}")
        if not equity.is_finite() or not Decimal(0) <= equity <= Decimal(1):
            raise InvalidInputError("equity must be between 0 and 1")
        cleaned["equity"] = str(equity)

    return cleaned


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job for an existing company.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        The stored job record, including its generated id

    Raises:
        InvalidReferenceError: If companyHandle does not name a company
    """
    data = _clean_payload(data)
    company_handle = data["companyHandle"]

    company = execute(
        db,
        """SELECT handle
           FROM companies
           WHERE handle = $1""",
        [company_handle],
    )
    if not company:
        raise InvalidReferenceError(f"Company does not exist: {company_handle}")

    rows = execute(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {COLUMNS}""",
        [
            data["title"],
            data.get("salary"),
            data.get("equity"),
            company_handle,
        ],
    )
    db.commit()

    job = _to_record(rows[0])
    logger.info(f"Created job {job['id']} for company {company_handle}")
    return job


def find_all(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    max_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
    company_handle: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List jobs ordered by title, optionally filtered.

    Args:
        db: Database session
        title: Case-insensitive substring of the job title
        min_salary: Keep jobs paying at least this much
        max_salary: Keep jobs paying at most this much
        has_equity: True keeps only jobs with non-zero equity; False/None adds no filter
        company_handle: Keep only this company's jobs

    Raises:
        InvalidInputError: If min_salary > max_salary
    """
    if min_salary is not None and max_salary is not None and min_salary > max_salary:
        raise InvalidInputError("Min salary cannot be greater than max")

    where = WhereClause()
    if title:
        where.add("LOWER(title) LIKE {} ESCAPE '\\'", like_pattern(title))
    if min_salary is not None:
        where.add("salary >= {}", min_salary)
    if max_salary is not None:
        where.add("salary <= {}", max_salary)
    if has_equity:
        where.add("equity > {}", 0)
    if company_handle:
        where.add("company_handle = {}", company_handle)

    where_sql, values = where.render()
    rows = execute(
        db,
        f"""SELECT {COLUMNS}
            FROM jobs{where_sql}
            ORDER BY title, id""",
        values,
    )
    return [_to_record(row) for row in rows]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by id.

    Raises:
        NotFoundError: If no job has this id
    """
    rows = execute(
        db,
        f"""SELECT {COLUMNS}
            FROM jobs
            WHERE id = $1""",
        [job_id],
    )
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
    return _to_record(rows[0])


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the fields present in `data` change.

    Args:
        db: Database session
        job_id: Job to update
        data: Any of {title, salary, equity}

    Raises:
        InvalidInputError: If data is empty, out of range, or names a fixed field
        NotFoundError: If no job has this id
    """
    data = _clean_payload(data)
    set_cols, values = build_set_fragment(data, FIELD_TO_COLUMN, UPDATABLE_COLUMNS)
    id_idx = len(values) + 1

    rows = execute(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE id = ${id_idx}
            RETURNING {COLUMNS}""",
        [*values, job_id],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")
    db.commit()

    logger.info(f"Updated job {job_id}: {sorted(data)}")
    return _to_record(rows[0])


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no job has this id
    """
    rows = execute(
        db,
        """DELETE
           FROM jobs
           WHERE id = $1
           RETURNING id""",
        [job_id],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")
    db.commit()

    logger.info(f"Deleted job {job_id}")
