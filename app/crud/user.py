"""
CRUD operations for users and their job applications.

Records are dicts with username, firstName, lastName, email and isAdmin.
The password hash is only ever read back inside `authenticate`.
"""

import logging
from typing import Any, Dict, List, Mapping
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import execute
from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.core.sql import build_set_fragment

logger = logging.getLogger(__name__)

FIELD_TO_COLUMN = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

UPDATABLE_COLUMNS = frozenset({"password", "first_name", "last_name", "email", "is_admin"})

COLUMNS = ('username, first_name AS "firstName", last_name AS "lastName", '
           'email, is_admin AS "isAdmin"')


def _to_record(row: Dict[str, Any]) -> Dict[str, Any]:
    # SQLite hands booleans back as 0/1
    row["isAdmin"] = bool(row["isAdmin"])
    return row


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        The user record (without password)

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    rows = execute(
        db,
        f"""SELECT {COLUMNS}, password
            FROM users
            WHERE username = $1""",
        [username],
    )
    if rows:
        user = rows[0]
        hashed_password = user.pop("password")
        if verify_password(password, hashed_password):
            return _to_record(user)

    logger.warning(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Args:
        db: Database session
        data: {username, password, firstName, lastName, email, isAdmin}

    Raises:
        ConflictError: If the username is taken
    """
    username = data["username"]

    duplicate = execute(
        db,
        """SELECT username
           FROM users
           WHERE username = $1""",
        [username],
    )
    if duplicate:
        raise ConflictError(f"Duplicate username: {username}")

    rows = execute(
        db,
        f"""INSERT INTO users
            (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {COLUMNS}""",
        [
            username,
            get_password_hash(data["password"]),
            data["firstName"],
            data["lastName"],
            data["email"],
            bool(data.get("isAdmin", False)),
        ],
    )
    db.commit()

    logger.info(f"Registered user {username}")
    return _to_record(rows[0])


def find_all(db: Session) -> List[Dict[str, Any]]:
    """List all users ordered by username."""
    rows = execute(
        db,
        f"""SELECT {COLUMNS}
            FROM users
            ORDER BY username""",
    )
    return [_to_record(row) for row in rows]


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Retrieve a user and the ids of the jobs they applied to.

    Raises:
        NotFoundError: If no user has this username
    """
    rows = execute(
        db,
        f"""SELECT {COLUMNS}
            FROM users
            WHERE username = $1""",
        [username],
    )
    if not rows:
        raise NotFoundError(f"No username: {username}")

    user = _to_record(rows[0])
    applications = execute(
        db,
        """SELECT job_id
           FROM applications
           WHERE username = $1
           ORDER BY job_id""",
        [username],
    )
    user["applications"] = [row["job_id"] for row in applications]
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user. A new password is hashed before it is stored.

    Args:
        db: Database session
        username: User to update
        data: Any of {firstName, lastName, password, email, isAdmin}

    Raises:
        InvalidInputError: If data is empty or names a non-updatable field
        NotFoundError: If no user has this username
    """
    data = dict(data)
    for field in ("firstName", "lastName", "email", "password"):
        if field in data and data[field] is None:
            raise InvalidInputError(f"{field} cannot be null")
    if "password" in data:
        data["password"] = get_password_hash(data["password"])

    set_cols, values = build_set_fragment(data, FIELD_TO_COLUMN, UPDATABLE_COLUMNS)
    username_idx = len(values) + 1

    rows = execute(
        db,
        f"""UPDATE users
            SET {set_cols}
            WHERE username = ${username_idx}
            RETURNING {COLUMNS}""",
        [*values, username],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No username: {username}")
    db.commit()

    logger.info(f"Updated user {username}: {sorted(data)}")
    return _to_record(rows[0])


def remove(db: Session, username: str) -> None:
    """
    Delete a user (their applications go with it).

    Raises:
        NotFoundError: If no user has this username
    """
    rows = execute(
        db,
        """DELETE
           FROM users
           WHERE username = $1
           RETURNING username""",
        [username],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No username: {username}")
    db.commit()

    logger.info(f"Deleted user {username}")


def apply(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the job or the user does not exist
        ConflictError: If the user already applied to this job
    """
    job = execute(
        db,
        """SELECT id
           FROM jobs
           WHERE id = $1""",
        [job_id],
    )
    if not job:
        raise NotFoundError(f"No job: {job_id}")

    user = execute(
        db,
        """SELECT username
           FROM users
           WHERE username = $1""",
        [username],
    )
    if not user:
        raise NotFoundError(f"No username: {username}")

    try:
        execute(
            db,
            """INSERT INTO applications (username, job_id)
               VALUES ($1, $2)
               RETURNING job_id""",
            [username, job_id],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"{username} already applied to job {job_id}")

    logger.info(f"User {username} applied to job {job_id}")
