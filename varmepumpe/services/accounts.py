"""
Accounts: registration, login, password changes and resets.
"""
import logging
import secrets

from flask import current_app
from sqlalchemy.exc import IntegrityError

from varmepumpe import db
from varmepumpe.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDenied,
    ValidationError,
)
from varmepumpe.models import Installer, User
from varmepumpe.models.base import utcnow
from varmepumpe.services import unit_of_work
from varmepumpe.utils.validators import validate_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid username or password'
ACCOUNT_DEACTIVATED = 'Account deactivated. Please contact support.'


def check_installer_conflicts(company_name=None, org_number=None, exclude_id=None):
    """Raise ConflictError when another installer already uses the name or number"""
    if company_name:
        query = Installer.query.filter(Installer.company_name == company_name)
        if exclude_id is not None:
            query = query.filter(Installer.id != exclude_id)
        if query.first():
            raise ConflictError(f'An installer with company name "{company_name}" already exists',
                                field='company_name')
    if org_number:
        query = Installer.query.filter(Installer.org_number == org_number)
        if exclude_id is not None:
            query = query.filter(Installer.id != exclude_id)
        if query.first():
            raise ConflictError(f'An installer with organisation number "{org_number}" already exists',
                                field='org_number')


def register(data):
    """
    Create a user, plus an installer profile for role 'installer'.

    Args:
        data (RegistrationInput): validated registration body

    Returns:
        User: the new user (not logged in)
    """
    if User.query.filter_by(username=data.username).first():
        raise ConflictError('Username is already taken', field='username')
    if User.query.filter_by(email=data.email).first():
        raise ConflictError('Email is already in use', field='email')
    if data.role == 'installer':
        check_installer_conflicts(data.company_name, data.org_number)

    user = User(
        username=data.username,
        email=data.email,
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role,
    )
    user.set_password(data.password)

    try:
        with unit_of_work() as session:
            session.add(user)
            if data.role == 'installer':
                auto_approve = current_app.config['INSTALLER_AUTO_APPROVE']
                session.add(Installer(
                    user=user,
                    company_name=data.company_name,
                    org_number=data.org_number,
                    contact_person=user.full_name,
                    email=data.email,
                    phone=data.phone,
                    address=data.address,
                    postal_code=data.postal_code,
                    city=data.city,
                    county=data.county,
                    municipality=data.municipality,
                    website=data.website,
                    approved=auto_approve,
                    active=True,
                ))
    except IntegrityError:
        # Lost a race against a concurrent registration
        logger.warning('Registration for %s hit a unique constraint', data.username)
        raise ConflictError('Username, email, company name or organisation number already in use')

    logger.info('Registered %s user %s', user.role, user.username)
    return user


def authenticate(username, password):
    """
    Check credentials and return the user.

    The same error is raised for an unknown username and a wrong password.
    Deactivated installers are refused even with valid credentials.
    """
    user = User.query.filter_by(username=username).first()
    if user is None or not user.check_password(password):
        logger.warning('Failed login for username %r', username)
        raise AuthenticationError(INVALID_CREDENTIALS)

    if user.is_installer() and user.installer is not None and not user.installer.active:
        logger.warning('Deactivated installer %s tried to log in', user.id)
        raise PermissionDenied(ACCOUNT_DEACTIVATED)

    return user


def get_installer_for_user(user):
    installer = Installer.query.filter_by(user_id=user.id).first()
    if installer is None:
        raise NotFoundError('Installer not found')
    return installer


def request_password_reset(email):
    """
    Issue a reset token valid for RESET_TOKEN_TTL.

    Returns the token, or None when no user has the email. Callers must not
    reveal which case happened. The token is only stored; nothing is mailed.
    """
    user = User.query.filter_by(email=email).first()
    if user is None:
        logger.info('Password reset requested for unknown email')
        return None

    token = secrets.token_hex(32)
    with unit_of_work():
        user.reset_token = token
        user.reset_token_expiry = utcnow() + current_app.config['RESET_TOKEN_TTL']

    logger.info('Password reset token issued for user %s', user.id)
    return token


def reset_password(token, new_password):
    """Set a new password from a reset token; the token is single use"""
    user = User.query.filter_by(reset_token=token).first()
    if user is None or user.reset_token_expiry is None or user.reset_token_expiry < utcnow():
        raise ValidationError({'token': 'Invalid or expired token'})

    with unit_of_work():
        user.set_password(new_password)
        user.reset_token = None
        user.reset_token_expiry = None

    logger.info('Password reset completed for user %s', user.id)
    return user


def change_password(user, current_password, new_password):
    if not user.check_password(current_password):
        raise ValidationError({'current_password': 'Current password is incorrect'})

    with unit_of_work():
        user.set_password(new_password)
    logger.info('User %s changed password', user.id)


def set_password(user_id, new_password):
    """Admin override of a user's password"""
    is_valid, message = validate_password(new_password, current_app.config['PASSWORD_MIN_LENGTH'])
    if not is_valid:
        raise ValidationError({'password': message})

    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError('User not found')

    with unit_of_work():
        user.set_password(new_password)
        user.reset_token = None
        user.reset_token_expiry = None
    logger.info('Password for user %s set by admin', user_id)
    return user


def create_superadmin(password, email, username='admin'):
    """
    Create the admin account if it does not exist yet.

    Returns:
        tuple: (user, created)
    """
    existing = User.query.filter_by(username=username).first()
    if existing:
        return existing, False

    user = User(username=username, email=email, first_name='Super', last_name='Admin', role='admin')
    user.set_password(password)
    with unit_of_work() as session:
        session.add(user)
    logger.info('Superadmin %s created', username)
    return user, True
