"""
Listing query construction.

Turns the raw (string) listing parameters of ``GET /api/users`` into a
:class:`UserQuery`: the filter predicates and the sort order the
repository applies.  Nothing here touches the database.

Parameters
----------

- ``status``  exact match on the status column.  Not validated against the
  enumeration; an unknown value simply matches nothing.
- ``city``    exact match on the address city.
- ``search``  case-insensitive substring match on name OR email.  LIKE
  wildcards in the input are escaped so they match literally.
- ``sort``    comma-separated ``field:direction`` tokens, first token is the
  primary key.  ``desc`` sorts descending, anything else ascending.
  Without a usable token the listing is newest first.

Empty strings count as absent.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger
from pydantic import BaseModel, Field

LIKE_ESCAPE = "\\"

# API field name -> User column attribute
SORTABLE_FIELDS: dict[str, str] = {
    "id": "id",
    "_id": "id",
    "name": "name",
    "email": "email",
    "age": "age",
    "phone": "phone",
    "status": "status",
    "role": "role",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "address.street": "address_street",
    "address.city": "address_city",
    "address.state": "address_state",
    "address.country": "address_country",
    "address.zipCode": "address_zip_code",
}
# snake_case column names are accepted as-is
SORTABLE_FIELDS.update({column: column for column in list(SORTABLE_FIELDS.values())})
SORTABLE_FIELDS["city"] = "address_city"


class SortKey(BaseModel):
    """One ordering term."""

    model_config = {"frozen": True}

    field: str = Field(..., description="User column attribute")
    descending: bool = False


DEFAULT_SORT: tuple[SortKey, ...] = (SortKey(field="created_at", descending=True),)


class UserQuery(BaseModel):
    """Structured listing query: filters ANDed together, ordering by priority."""

    status: Optional[str] = None
    city: Optional[str] = None
    search: Optional[str] = None
    sort: list[SortKey] = Field(default_factory=lambda: list(DEFAULT_SORT))

    @property
    def search_pattern(self) -> Optional[str]:
        """LIKE pattern for the search term, or None when there is no search."""
        if self.search is None:
            return None
        return f"%{escape_like(self.search)}%"

    @property
    def is_default_sort(self) -> bool:
        return tuple(self.sort) == DEFAULT_SORT


def escape_like(value: str) -> str:
    """Escape LIKE metacharacters so ``value`` matches literally (escape char ``\\``)."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def parse_sort(raw: Optional[str]) -> list[SortKey]:
    """Parse ``field:direction[,field:direction...]`` into sort keys.

    Unknown fields and empty tokens are skipped.  Returns the default order
    (``createdAt`` descending) when nothing usable is left.
    """
    if not raw:
        return list(DEFAULT_SORT)

    keys: list[SortKey] = []
    seen: set[str] = set()
    for token in raw.split(","):
        field, _, direction = token.strip().partition(":")
        field = field.strip()
        if not field:
            continue
        column = SORTABLE_FIELDS.get(field)
        if column is None:
            logger.debug("Ignoring unknown sort field {!r}", field)
            continue
        # A repeated field keeps its first (highest priority) position
        if column in seen:
            continue
        seen.add(column)
        keys.append(SortKey(field=column, descending=direction.strip() == "desc"))

    return keys or list(DEFAULT_SORT)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    return value


def build_user_query(
    status: Optional[str] = None,
    city: Optional[str] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
) -> UserQuery:
    """Build the listing query from raw request parameters."""
    query = UserQuery(status=_clean(status), city=_clean(city), search=_clean(search), sort=parse_sort(sort))
    logger.debug("Built user query {}", query)
    return query
