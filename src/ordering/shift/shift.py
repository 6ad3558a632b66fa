"""Shift aggregate: a delivery window a customer picks at checkout."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from ordering.domain import ordering


@ordering.aggregate
class Shift:
    name = String(required=True, max_length=50)
    start_time = String(required=True, max_length=5)  # "HH:MM"
    end_time = String(required=True, max_length=5)
    is_active = Boolean(default=True)
    created_at = DateTime()

    @invariant.post
    def times_must_be_hh_mm(self):
        for field in ("start_time", "end_time"):
            value = getattr(self, field)
            if value is None:
                continue
            try:
                datetime.strptime(value, "%H:%M")
            except ValueError:
                raise ValidationError({field: ["Time must be in HH:MM format"]}) from None

    @classmethod
    def create(cls, name, start_time, end_time, is_active=True):
        return cls(
            name=name,
            start_time=start_time,
            end_time=end_time,
            is_active=is_active,
            created_at=datetime.now(UTC),
        )

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Shift is already inactive"]})
        self.is_active = False
