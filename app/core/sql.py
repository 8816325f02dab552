"""
Helpers for building parameterized SQL.

Both builders emit PostgreSQL-style positional placeholders ($1, $2, ...)
and keep every value out of the SQL text. Column names are the only thing
interpolated: they must come from a developer-authored translation table,
an allow-list, or a fixed predicate template, never from request data.
"""

from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from app.core.exceptions import InvalidInputError


class SetFragment(NamedTuple):
    """`"col1"=$1, "col2"=$2` plus the values to bind, in the same order."""
    fragment: str
    values: List[Any]


def build_set_fragment(
    data: Mapping[str, Any],
    field_translation: Dict[str, str],
    allowed_columns: Optional[Iterable[str]] = None,
) -> SetFragment:
    """
    Build the SET clause for a partial update.

    Args:
        data: Fields to change, e.g. {"firstName": "Aliya", "age": 32}
        field_translation: API field name -> column name, e.g.
            {"firstName": "first_name"}. Untranslated keys are used as-is.
        allowed_columns: Optional closed set of columns the caller may update

    Returns:
        SetFragment('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        InvalidInputError: If data is empty or a field resolves to a column
            outside allowed_columns
    """
    if not data:
        raise InvalidInputError("No data")

    allowed = set(allowed_columns) if allowed_columns is not None else None

    cols = []
    for idx, field in enumerate(data, start=1):
        column = field_translation.get(field, field)
        if allowed is not None and column not in allowed:
            raise InvalidInputError(f"Field cannot be updated: {field}")
        cols.append(f'"{column}"=${idx}')

    return SetFragment(", ".join(cols), list(data.values()))


def like_pattern(term: str) -> str:
    """Lower-cased `%term%` with LIKE wildcards escaped (pair with ESCAPE '\\')."""
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class WhereClause:
    """
    Accumulates filter predicates and renders them with correctly numbered
    placeholders.

    Each template holds a single `{}` that becomes the predicate's
    placeholder:

        where = WhereClause()
        where.add("num_employees >= {}", 5)
        where.add("LOWER(name) LIKE {} ESCAPE '\\'", like_pattern("net"))
        sql, values = where.render()
        # " WHERE num_employees >= $1 AND LOWER(name) LIKE $2 ESCAPE '\\'"
    """

    def __init__(self, start: int = 1):
        self.start = start
        self._predicates: List[Tuple[str, Any]] = []

    def add(self, template: str, value: Any) -> "WhereClause":
        self._predicates.append((template, value))
        return self

    def __len__(self) -> int:
        return len(self._predicates)

    def render(self) -> Tuple[str, List[Any]]:
        if not self._predicates:
            return "", []

        clauses = [
            template.format(f"${position}")
            for position, (template, _) in enumerate(self._predicates, start=self.start)
        ]
        values = [value for _, value in self._predicates]
        return " WHERE " + " AND ".join(clauses), values
