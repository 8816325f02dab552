"""
CRUD operations for companies.

Plain parameterized SQL over the `companies` table. Records are dicts keyed
by the API field names (handle, name, description, numEmployees, logoUrl).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import execute
from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.core.sql import WhereClause, build_set_fragment, like_pattern

logger = logging.getLogger(__name__)

# API field name -> column; fields not listed map to themselves
FIELD_TO_COLUMN = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

UPDATABLE_COLUMNS = frozenset({"name", "description", "num_employees", "logo_url"})

COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


NOT_NULL_FIELDS = ("name", "description")


def _check_payload(data: Mapping[str, Any]) -> None:
    for field in NOT_NULL_FIELDS:
        if field in data and data[field] is None:
            raise InvalidInputError(f"{field} cannot be null")

    num_employees = data.get("numEmployees")
    if num_employees is not None and num_employees < 0:
        raise InvalidInputError("numEmployees must be non-negative")


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        The stored company record

    Raises:
        ConflictError: If the handle or the name is already taken
    """
    handle = data["handle"]
    _check_payload(data)

    duplicates = execute(
        db,
        """SELECT handle, name
           FROM companies
           WHERE handle = $1 OR name = $2""",
        [handle, data["name"]],
    )
    for duplicate in duplicates:
        if duplicate["handle"] == handle:
            raise ConflictError(f"Duplicate company: {handle}")
    if duplicates:
        raise ConflictError(f"Duplicate company name: {data['name']}")

    rows = execute(
        db,
        f"""INSERT INTO companies
            (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COLUMNS}""",
        [
            handle,
            data["name"],
            data.get("description"),
            data.get("numEmployees"),
            data.get("logoUrl"),
        ],
    )
    db.commit()

    logger.info(f"Created company {handle}")
    return rows[0]


def find_all(
    db: Session,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
    name: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List companies ordered by name, optionally filtered.

    Args:
        db: Database session
        min_employees: Keep companies with at least this many employees
        max_employees: Keep companies with at most this many employees
        name: Case-insensitive substring of the company name

    Raises:
        InvalidInputError: If min_employees > max_employees
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise InvalidInputError("Min employees cannot be greater than max")

    where = WhereClause()
    if min_employees is not None:
        where.add("num_employees >= {}", min_employees)
    if max_employees is not None:
        where.add("num_employees <= {}", max_employees)
    if name:
        where.add("LOWER(name) LIKE {} ESCAPE '\\'", like_pattern(name))

    where_sql, values = where.render()
    return execute(
        db,
        f"""SELECT {COLUMNS}
            FROM companies{where_sql}
            ORDER BY name""",
        values,
    )


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company by handle.

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = execute(
        db,
        f"""SELECT {COLUMNS}
            FROM companies
            WHERE handle = $1""",
        [handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")
    return rows[0]


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only the fields present in `data` change.

    Args:
        db: Database session
        handle: Company to update
        data: Any of {name, description, numEmployees, logoUrl}

    Raises:
        InvalidInputError: If data is empty or names a non-updatable field
        NotFoundError: If no company has this handle
        ConflictError: If the new name belongs to another company
    """
    _check_payload(data)
    set_cols, values = build_set_fragment(data, FIELD_TO_COLUMN, UPDATABLE_COLUMNS)
    handle_idx = len(values) + 1

    try:
        rows = execute(
            db,
            f"""UPDATE companies
                SET {set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {COLUMNS}""",
            [*values, handle],
        )
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Duplicate company name: {data.get('name')}")
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")
    db.commit()

    logger.info(f"Updated company {handle}: {sorted(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = execute(
        db,
        """DELETE
           FROM companies
           WHERE handle = $1
           RETURNING handle""",
        [handle],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")
    db.commit()

    logger.info(f"Deleted company {handle}")
