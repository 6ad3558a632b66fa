"""Shift management: commands, handler and the checkout picker query."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.shift.shift import Shift


@ordering.command(part_of="Shift")
class CreateShift:
    name = String(required=True, max_length=50)
    start_time = String(required=True, max_length=5)
    end_time = String(required=True, max_length=5)
    is_active = Boolean(default=True)


@ordering.command(part_of="Shift")
class DeactivateShift:
    shift_id = Identifier(required=True)


def list_active_shifts():
    shifts = current_domain.repository_for(Shift)._dao.query.filter(is_active=True).all().items
    return sorted(shifts, key=lambda s: s.start_time)


def require_active_shift(shift_id):
    try:
        shift = current_domain.repository_for(Shift).get(shift_id)
    except ObjectNotFoundError:
        raise ValidationError({"shift_id": ["Unknown delivery shift"]}) from None
    if not shift.is_active:
        raise ValidationError({"shift_id": ["Delivery shift is not available"]})
    return shift


@ordering.command_handler(part_of=Shift)
class ManageShiftHandler:
    @handle(CreateShift)
    def create_shift(self, command):
        shift = Shift.create(
            name=command.name,
            start_time=command.start_time,
            end_time=command.end_time,
            is_active=command.is_active,
        )
        current_domain.repository_for(Shift).add(shift)
        return str(shift.id)

    @handle(DeactivateShift)
    def deactivate_shift(self, command):
        repo = current_domain.repository_for(Shift)
        shift = repo.get(command.shift_id)
        shift.deactivate()
        repo.add(shift)
