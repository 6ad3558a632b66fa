"""Uniqueness checks and lookups over the User repository."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from identity.user.user import User


def find_by_phone(phone):
    users = current_domain.repository_for(User)._dao.query.filter(phone=phone).all().items
    return users[0] if users else None


def find_by_email(email):
    users = current_domain.repository_for(User)._dao.query.filter(email=email).all().items
    return users[0] if users else None


def ensure_contact_details_unique(phone=None, email=None, exclude_user_id=None):
    """Raise if another account already uses the phone number or email."""
    if phone:
        owner = find_by_phone(phone)
        if owner is not None and str(owner.id) != str(exclude_user_id):
            raise ValidationError({"phone": ["Phone number is already registered"]})

    if email:
        owner = find_by_email(email)
        if owner is not None and str(owner.id) != str(exclude_user_id):
            raise ValidationError({"email": ["Email is already registered"]})
