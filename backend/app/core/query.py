from dataclasses import dataclass
from datetime import date
from typing import Optional

from app.core.errors import ValidationError


@dataclass(frozen=True)
class RangeQuery:
    """Optional date window plus pagination for history/log reads.

    Each store applies only the filters whose fields are set, so a query
    never carries more bound parameters than it needs.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    limit: Optional[int] = None
    offset: int = 0

    def validated(self, default_limit: int, max_limit: int) -> "RangeQuery":
        """Return a copy with the default limit filled in, or raise on bad bounds."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("end_date must be on or after start_date")
        limit = default_limit if self.limit is None else self.limit
        if limit <= 0 or limit > max_limit:
            raise ValidationError(f"limit must be between 1 and {max_limit}")
        if self.offset < 0:
            raise ValidationError("offset cannot be negative")
        return RangeQuery(self.start_date, self.end_date, limit, self.offset)

    def apply(self, query, column):
        """Filter `query` on `column` by the window, then page it."""
        if self.start_date is not None:
            query = query.filter(column >= self.start_date)
        if self.end_date is not None:
            query = query.filter(column <= self.end_date)
        query = query.order_by(column.desc())
        if self.limit is not None:
            query = query.limit(self.limit)
        if self.offset:
            query = query.offset(self.offset)
        return query
