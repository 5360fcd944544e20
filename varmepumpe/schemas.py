"""
Typed request bodies

Each input class is built with ``from_json(data)``, which either returns a
populated instance or raises ``ValidationError`` listing every bad field.
Blueprints never read ``request.get_json()`` keys directly.
"""
from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from flask import current_app

from varmepumpe.errors import ValidationError
from varmepumpe.utils.validators import (
    validate_email,
    validate_org_number,
    validate_password,
    validate_phone,
    validate_postal_code,
)

SELF_REGISTER_ROLES = ('customer', 'installer')
REQUEST_STATUSES = ('open', 'contacted', 'closed')
CONTACT_STATUSES = ('interested', 'contacted', 'quoted', 'accepted', 'completed')
CUSTOMER_CONTACT_STATUSES = ('pending', 'accepted', 'completed')


def _body(data):
    if not isinstance(data, dict):
        raise ValidationError({'body': 'Request body must be a JSON object'})
    return data


def _text(data, key):
    """Stripped string value, None when missing or blank"""
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def _require(data, keys, errors):
    values = {}
    for key in keys:
        value = _text(data, key)
        if value is None:
            errors[key] = f'{key} is required'
        values[key] = value
    return values


def _optional(data, keys):
    return {key: _text(data, key) for key in keys}


def _bool(data, key, errors):
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return value
    errors[key] = f'{key} must be true or false'
    return None


def _date(data, key, errors):
    value = _text(data, key)
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        errors[key] = f'{key} must be a date (YYYY-MM-DD)'
        return None


def _decimal(data, key, errors):
    value = data.get(key)
    if value is None or value == '':
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        errors[key] = f'{key} must be a number'
        return None
    if amount < 0:
        errors[key] = f'{key} cannot be negative'
        return None
    return amount


def _raise_if(errors):
    if errors:
        raise ValidationError(errors)


class _Input:
    """Shared helpers for dataclass inputs"""

    def as_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

@dataclass
class LoginInput(_Input):
    username: str
    password: str

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        if not _text(data, 'username'):
            errors['username'] = 'Username is required'
        # Passwords are not stripped
        password = data.get('password')
        if not isinstance(password, str) or not password:
            errors['password'] = 'Password is required'
        _raise_if(errors)
        return cls(username=_text(data, 'username'), password=password)


@dataclass
class RegistrationInput(_Input):
    username: str
    email: str
    password: str
    first_name: str
    last_name: str
    role: str = 'installer'
    company_name: Optional[str] = None
    org_number: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    municipality: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        values = _require(data, ['username', 'email', 'first_name', 'last_name'], errors)

        if values['username'] and len(values['username']) < 3:
            errors['username'] = 'Username must be at least 3 characters'
        if values['email']:
            values['email'] = values['email'].lower()
            if not validate_email(values['email']):
                errors['email'] = 'Invalid email address'

        password = data.get('password') if isinstance(data.get('password'), str) else None
        is_valid, message = validate_password(password, current_app.config['PASSWORD_MIN_LENGTH'])
        if not is_valid:
            errors['password'] = message

        role = _text(data, 'role') or 'installer'
        if role not in SELF_REGISTER_ROLES:
            errors['role'] = f'Invalid role. Must be one of: {", ".join(SELF_REGISTER_ROLES)}'

        extra = _optional(data, ['company_name', 'org_number', 'phone', 'address', 'postal_code',
                                 'city', 'county', 'municipality', 'website'])
        if role == 'installer':
            if not extra['company_name']:
                errors['company_name'] = 'company_name is required'
            if not validate_org_number(extra['org_number']):
                errors['org_number'] = 'Organisation number must be 9 digits'
            if not validate_phone(extra['phone']):
                errors['phone'] = 'A valid phone number is required'
        if extra['postal_code'] and not validate_postal_code(extra['postal_code']):
            errors['postal_code'] = 'Postal code must be 4 digits'

        _raise_if(errors)
        return cls(password=password, role=role, **values, **extra)


@dataclass
class PasswordResetRequestInput(_Input):
    email: str

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        email = (_text(data, 'email') or '').lower()
        if not validate_email(email):
            raise ValidationError({'email': 'Invalid email address'})
        return cls(email=email)


@dataclass
class NewPasswordInput(_Input):
    token: str
    password: str

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        token = _text(data, 'token')
        if not token:
            errors['token'] = 'Token is required'
        password = data.get('password') if isinstance(data.get('password'), str) else None
        is_valid, message = validate_password(password, current_app.config['PASSWORD_MIN_LENGTH'])
        if not is_valid:
            errors['password'] = message
        _raise_if(errors)
        return cls(token=token, password=password)


@dataclass
class ChangePasswordInput(_Input):
    current_password: str
    new_password: str

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        current = data.get('current_password')
        if not isinstance(current, str) or not current:
            errors['current_password'] = 'Current password is required'
        new = data.get('new_password') if isinstance(data.get('new_password'), str) else None
        is_valid, message = validate_password(new, current_app.config['PASSWORD_MIN_LENGTH'])
        if not is_valid:
            errors['new_password'] = message
        _raise_if(errors)
        return cls(current_password=current, new_password=new)


@dataclass
class SetPasswordInput(_Input):
    """Admin override of another user's password"""
    password: str

    @classmethod
    def from_json(cls, data):
        data = _body(data or {})
        password = data.get('password') if isinstance(data.get('password'), str) else None
        is_valid, message = validate_password(password, current_app.config['PASSWORD_MIN_LENGTH'])
        if not is_valid:
            raise ValidationError({'password': message})
        return cls(password=password)


@dataclass
class AdminPasswordInput(_Input):
    user_id: int
    new_password: str

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        user_id = data.get('user_id')
        if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id < 1:
            errors['user_id'] = 'user_id is required'
        new_password = data.get('new_password') if isinstance(data.get('new_password'), str) else None
        is_valid, message = validate_password(new_password, current_app.config['PASSWORD_MIN_LENGTH'])
        if not is_valid:
            errors['new_password'] = message
        _raise_if(errors)
        return cls(user_id=user_id, new_password=new_password)



# ---------------------------------------------------------------------------
# Service requests
# ---------------------------------------------------------------------------

SERVICE_REQUEST_REQUIRED = ['full_name', 'phone', 'address', 'postal_code', 'city', 'county', 'municipality']
SERVICE_REQUEST_OPTIONAL = ['email', 'heat_pump_brand', 'heat_pump_model', 'service_type',
                            'description', 'preferred_contact_time']


def _check_service_request_fields(values, errors):
    if values.get('phone') and not validate_phone(values['phone']):
        errors['phone'] = 'Invalid phone number'
    if values.get('postal_code') and not validate_postal_code(values['postal_code']):
        errors['postal_code'] = 'Postal code must be 4 digits'
    if values.get('email'):
        values['email'] = values['email'].lower()
        if not validate_email(values['email']):
            errors['email'] = 'Invalid email address'


@dataclass
class ServiceRequestInput(_Input):
    full_name: str
    phone: str
    address: str
    postal_code: str
    city: str
    county: str
    municipality: str
    email: Optional[str] = None
    heat_pump_brand: Optional[str] = None
    heat_pump_model: Optional[str] = None
    service_type: Optional[str] = None
    description: Optional[str] = None
    preferred_contact_time: Optional[str] = None

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        values = _require(data, SERVICE_REQUEST_REQUIRED, errors)
        values.update(_optional(data, SERVICE_REQUEST_OPTIONAL))
        _check_service_request_fields(values, errors)
        _raise_if(errors)
        return cls(**values)


@dataclass
class ServiceRequestUpdate(_Input):
    """Admin edit: only the keys present in the body are changed"""
    changes: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        changes = {}
        for key in SERVICE_REQUEST_REQUIRED:
            if key in data:
                value = _text(data, key)
                if value is None:
                    errors[key] = f'{key} cannot be empty'
                changes[key] = value
        for key in SERVICE_REQUEST_OPTIONAL:
            if key in data:
                changes[key] = _text(data, key)
        if 'status' in data:
            status = _text(data, 'status')
            if status not in REQUEST_STATUSES:
                errors['status'] = f'Invalid status. Must be one of: {", ".join(REQUEST_STATUSES)}'
            changes['status'] = status
        _check_service_request_fields(changes, errors)
        _raise_if(errors)
        return cls(changes=changes)


@dataclass
class ContactInput(_Input):
    status: str = 'interested'
    notes: Optional[str] = None
    quote_amount: Optional[Decimal] = None

    @classmethod
    def from_json(cls, data):
        data = _body(data or {})
        errors = {}
        status = _text(data, 'status') or 'interested'
        if status not in CONTACT_STATUSES:
            errors['status'] = f'Invalid status. Must be one of: {", ".join(CONTACT_STATUSES)}'
        quote_amount = _decimal(data, 'quote_amount', errors)
        _raise_if(errors)
        return cls(status=status, notes=_text(data, 'notes'), quote_amount=quote_amount)


# ---------------------------------------------------------------------------
# Installers and service areas
# ---------------------------------------------------------------------------

INSTALLER_PROFILE_FIELDS = ['company_name', 'org_number', 'contact_person', 'email', 'phone',
                            'address', 'postal_code', 'city', 'county', 'municipality', 'website']
INSTALLER_REQUIRED_FIELDS = ('company_name', 'org_number', 'contact_person', 'email', 'phone')
INSTALLER_ADMIN_FLAGS = ['approved', 'active', 'certified']


@dataclass
class InstallerCreate(_Input):
    """
    Company profile for the logged-in user. ``contact_person`` and ``email``
    may be left out; the user's own name and e-mail are used then.
    """
    company_name: str
    org_number: str
    phone: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    municipality: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        values = _require(data, ['company_name', 'org_number', 'phone'], errors)
        values.update(_optional(data, ['contact_person', 'email', 'address', 'postal_code',
                                       'city', 'county', 'municipality', 'website']))

        if values['org_number'] and not validate_org_number(values['org_number']):
            errors['org_number'] = 'Organisation number must be 9 digits'
        if values['phone'] and not validate_phone(values['phone']):
            errors['phone'] = 'Invalid phone number'
        if values['email']:
            values['email'] = values['email'].lower()
            if not validate_email(values['email']):
                errors['email'] = 'Invalid email address'
        if values['postal_code'] and not validate_postal_code(values['postal_code']):
            errors['postal_code'] = 'Postal code must be 4 digits'

        _raise_if(errors)
        return cls(**values)


@dataclass
class InstallerUpdate(_Input):
    """Partial installer edit; admin edits may also set flags and rating"""
    changes: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, data, admin=False):
        data = _body(data)
        errors = {}
        changes = {}
        for key in INSTALLER_PROFILE_FIELDS:
            if key not in data:
                continue
            value = _text(data, key)
            if value is None and key in INSTALLER_REQUIRED_FIELDS:
                errors[key] = f'{key} cannot be empty'
            changes[key] = value

        if changes.get('org_number') and not validate_org_number(changes['org_number']):
            errors['org_number'] = 'Organisation number must be 9 digits'
        if changes.get('email'):
            changes['email'] = changes['email'].lower()
            if not validate_email(changes['email']):
                errors['email'] = 'Invalid email address'
        if changes.get('postal_code') and not validate_postal_code(changes['postal_code']):
            errors['postal_code'] = 'Postal code must be 4 digits'

        if admin:
            # Flags and rating are NOT NULL columns
            for key in INSTALLER_ADMIN_FLAGS:
                if key in data:
                    changes[key] = _bool(data, key, errors)
                    if changes[key] is None and key not in errors:
                        errors[key] = f'{key} must be true or false'
            if 'rating' in data:
                rating = _decimal(data, 'rating', errors)
                if rating is None and 'rating' not in errors:
                    errors['rating'] = 'rating must be a number between 0 and 5'
                elif rating is not None and rating > 5:
                    errors['rating'] = 'rating must be between 0 and 5'
                changes['rating'] = rating
            if 'total_services' in data:
                total = data.get('total_services')
                if not isinstance(total, int) or isinstance(total, bool) or total < 0:
                    errors['total_services'] = 'total_services must be a non-negative integer'
                changes['total_services'] = total

        _raise_if(errors)
        return cls(changes=changes)


@dataclass
class InstallerStatusInput(_Input):
    approved: Optional[bool] = None
    active: Optional[bool] = None

    @classmethod
    def from_json(cls, data, require=None):
        data = _body(data)
        errors = {}
        approved = _bool(data, 'approved', errors)
        active = _bool(data, 'active', errors)
        if require and data.get(require) is None:
            errors[require] = f'{require} is required'
        if approved is None and active is None and not errors:
            errors['status'] = 'approved or active is required'
        _raise_if(errors)
        return cls(approved=approved, active=active)


@dataclass(frozen=True)
class ServiceAreaInput(_Input):
    county: str
    municipality: str

    @classmethod
    def list_from_json(cls, items, key):
        if not isinstance(items, list):
            raise ValidationError({key: f'{key} must be an array'})
        errors = {}
        areas = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                errors[f'{key}[{index}]'] = 'Each entry must be an object'
                continue
            county = _text(item, 'county')
            municipality = _text(item, 'municipality')
            if not county:
                errors[f'{key}[{index}].county'] = 'county is required'
            if not municipality:
                errors[f'{key}[{index}].municipality'] = 'municipality is required'
            if county and municipality:
                areas.append(cls(county=county, municipality=municipality))
        _raise_if(errors)
        return areas

    @classmethod
    def list_from_body(cls, data, key):
        """Areas listed under ``key`` in a request body"""
        return cls.list_from_json(_body(data or {}).get(key), key)


# ---------------------------------------------------------------------------
# Customers, heat pumps and customer contacts
# ---------------------------------------------------------------------------

CUSTOMER_FIELDS = ['full_name', 'email', 'phone', 'address', 'postal_code', 'city', 'county', 'municipality']


@dataclass
class CustomerInput(_Input):
    """Customer profile; with ``partial=True`` only present keys are kept"""
    values: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, data, partial=False):
        data = _body(data)
        errors = {}
        if partial:
            values = {}
            for key in CUSTOMER_FIELDS:
                if key in data:
                    values[key] = _text(data, key)
                    if values[key] is None:
                        errors[key] = f'{key} cannot be empty'
        else:
            values = _require(data, CUSTOMER_FIELDS, errors)
        if values.get('email'):
            values['email'] = values['email'].lower()
            if not validate_email(values['email']):
                errors['email'] = 'Invalid email address'
        if values.get('postal_code') and not validate_postal_code(values['postal_code']):
            errors['postal_code'] = 'Postal code must be 4 digits'
        if 'subscription_active' in data:
            values['subscription_active'] = _bool(data, 'subscription_active', errors)
        _raise_if(errors)
        return cls(values=values)


@dataclass
class HeatPumpInput(_Input):
    customer_id: int
    brand: str
    model: str
    last_service_date: Optional[date] = None
    next_service_due: Optional[date] = None

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        values = _require(data, ['brand', 'model'], errors)
        customer_id = data.get('customer_id')
        if not isinstance(customer_id, int) or isinstance(customer_id, bool):
            errors['customer_id'] = 'customer_id is required'
        last = _date(data, 'last_service_date', errors)
        due = _date(data, 'next_service_due', errors)
        _raise_if(errors)
        return cls(customer_id=customer_id, last_service_date=last, next_service_due=due, **values)


@dataclass
class CustomerContactInput(_Input):
    customer_id: int
    installer_id: int
    status: str = 'pending'
    notes: Optional[str] = None

    @classmethod
    def from_json(cls, data):
        data = _body(data)
        errors = {}
        ids = {}
        for key in ('customer_id', 'installer_id'):
            value = data.get(key)
            if not isinstance(value, int) or isinstance(value, bool):
                errors[key] = f'{key} is required'
            ids[key] = value
        status = _text(data, 'status') or 'pending'
        if status not in CUSTOMER_CONTACT_STATUSES:
            errors['status'] = f'Invalid status. Must be one of: {", ".join(CUSTOMER_CONTACT_STATUSES)}'
        _raise_if(errors)
        return cls(status=status, notes=_text(data, 'notes'), **ids)


# ---------------------------------------------------------------------------
# Postal codes
# ---------------------------------------------------------------------------

POSTAL_CODE_FIELDS = ['postal_code', 'post_place', 'municipality', 'county']


@dataclass
class PostalCodeInput(_Input):
    postal_code: str
    post_place: str
    municipality: str
    county: str

    @classmethod
    def collect(cls, data, partial=False):
        """Return (values, errors) without raising; used row by row on import"""
        if not isinstance(data, dict):
            return {}, {'row': 'Each row must be an object'}
        errors = {}
        if partial:
            values = {}
            for key in POSTAL_CODE_FIELDS:
                if key in data:
                    values[key] = _text(data, key)
                    if values[key] is None:
                        errors[key] = f'{key} cannot be empty'
        else:
            values = _require(data, POSTAL_CODE_FIELDS, errors)
        if values.get('postal_code') and not validate_postal_code(values['postal_code']):
            errors['postal_code'] = 'Postal code must be 4 digits'
        return values, errors

    @classmethod
    def from_json(cls, data):
        values, errors = cls.collect(_body(data))
        _raise_if(errors)
        return cls(**values)


@dataclass
class PostalCodeUpdate(_Input):
    """Partial postal code edit: only the keys present in the body change"""
    changes: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, data):
        changes, errors = PostalCodeInput.collect(_body(data), partial=True)
        _raise_if(errors)
        return cls(changes=changes)


@dataclass
class PostalCodeImportInput(_Input):
    """Bulk import body; rows are validated one by one during the import"""
    rows: list

    @classmethod
    def from_json(cls, data):
        rows = _body(data or {}).get('data')
        if not isinstance(rows, list):
            raise ValidationError({'data': 'data must be an array of rows'})
        return cls(rows=rows)
