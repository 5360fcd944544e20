"""Utilities package"""
from .validators import (
    validate_email,
    validate_org_number,
    validate_password,
    validate_phone,
    validate_postal_code,
)

__all__ = [
    'validate_email',
    'validate_org_number',
    'validate_password',
    'validate_phone',
    'validate_postal_code',
]
