"""Sort specification for questionnaire listings.

Accepts the query form `field` or `field,direction` (e.g. `id`, `title,desc`).
Only a small whitelist of fields is sortable so the value can be mapped onto
SQL column names without interpolating user input.
"""

from __future__ import annotations

from typing import Iterable, Literal

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError


class InvalidSortError(ValueError):
    pass


class Sort(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: Literal["id", "title"] = "id"
    direction: Literal["asc", "desc"] = "asc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"

    @classmethod
    def by_id(cls) -> "Sort":
        return cls(field="id", direction="asc")

    def apply(self, items: Iterable) -> list:
        """Return `items` ordered by this sort (stable for equal keys)."""
        return sorted(items, key=lambda q: getattr(q, self.field) or "", reverse=self.descending)


def parse_sort(text: str | None) -> Sort:
    """Parse a `sort` query value; blank means ascending by id."""
    raw = (text or "").strip()
    if not raw:
        return Sort.by_id()
    parts = [p.strip().lower() for p in raw.split(",")]
    if len(parts) > 2 or not parts[0]:
        raise InvalidSortError(f"malformed sort value: {raw!r}")
    try:
        if len(parts) == 2:
            return Sort(field=parts[0], direction=parts[1])
        return Sort(field=parts[0])
    except PydanticValidationError as e:
        raise InvalidSortError(f"unsupported sort value: {raw!r}") from e


__all__ = ["Sort", "InvalidSortError", "parse_sort"]
