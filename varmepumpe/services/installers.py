"""
Installer profiles, the approval workflow and GDPR erasure.

    pending (approved=False) -> active (approved, active)
    active -> deactivated (active=False) -> active
"""
import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError

from varmepumpe import db
from varmepumpe.errors import ConflictError, NotFoundError
from varmepumpe.models import Installer
from varmepumpe.services import unit_of_work
from varmepumpe.services.accounts import check_installer_conflicts

logger = logging.getLogger(__name__)


def get_installer(installer_id):
    installer = db.session.get(Installer, installer_id)
    if installer is None:
        raise NotFoundError('Installer not found')
    return installer


def list_visible():
    """Approved and active installers, best rated first"""
    return (
        Installer.query
        .filter(Installer.approved.is_(True), Installer.active.is_(True))
        .order_by(Installer.rating.desc(), Installer.company_name)
        .all()
    )


def list_all():
    return Installer.query.order_by(Installer.created_at.desc(), Installer.id.desc()).all()


def list_pending():
    return (
        Installer.query
        .filter(Installer.approved.is_(False))
        .order_by(Installer.created_at, Installer.id)
        .all()
    )


def create_installer(user, data):
    """
    Create a company profile for ``user`` (one per user). The profile starts
    unapproved unless INSTALLER_AUTO_APPROVE is set.

    Args:
        user (User): the logged-in user
        data (InstallerCreate): validated profile values
    """
    if Installer.query.filter_by(user_id=user.id).first():
        raise ConflictError('Installer profile already exists', field='user_id')
    check_installer_conflicts(data.company_name, data.org_number)

    values = data.as_dict()
    values['contact_person'] = values['contact_person'] or user.full_name
    values['email'] = values['email'] or user.email
    installer = Installer(
        user_id=user.id,
        approved=current_app.config['INSTALLER_AUTO_APPROVE'],
        active=True,
        **values
    )
    try:
        with unit_of_work() as session:
            session.add(installer)
    except IntegrityError:
        logger.warning('Installer profile for user %s hit a unique constraint', user.id)
        raise ConflictError('Company name or organisation number already in use')

    logger.info('Installer profile %s created for user %s', installer.id, user.id)
    return installer


def update_installer(installer, update):
    """
    Apply a partial update. Company name and organisation number must stay
    unique among the other installers.

    Args:
        installer (Installer): the installer to change
        update (InstallerUpdate): validated changes
    """
    changes = update.changes
    check_installer_conflicts(
        company_name=changes.get('company_name'),
        org_number=changes.get('org_number'),
        exclude_id=installer.id,
    )

    with unit_of_work():
        for key, value in changes.items():
            setattr(installer, key, value)
        installer.touch()

    logger.info('Installer %s updated: %s', installer.id, ', '.join(sorted(changes)) or 'no fields')
    return installer


def set_approval(installer_id, approved):
    installer = get_installer(installer_id)
    with unit_of_work():
        installer.approved = approved
        if approved:
            installer.active = True
        installer.touch()

    logger.info('Installer %s %s', installer_id, 'approved' if approved else 'unapproved')
    return installer


def set_status(installer_id, approved=None, active=None):
    """
    Change approval and/or activation.

    Returns:
        tuple: (installer, message describing the transition)
    """
    installer = get_installer(installer_id)
    with unit_of_work():
        if approved is not None:
            installer.approved = approved
        if active is not None:
            installer.active = active
        installer.touch()

    if approved is not None and active is None:
        message = 'Installer approved' if approved else 'Installer approval revoked'
    elif active is not None and approved is None:
        message = 'Installer activated' if active else 'Installer deactivated'
    else:
        message = f'Installer status is now {installer.status}'

    logger.info('Installer %s status change: %s', installer_id, message)
    return installer, message


def delete_installer(installer_id):
    """
    GDPR erasure: the installer, its service areas, contacts and user account
    are removed together or not at all.
    """
    installer = get_installer(installer_id)
    user = installer.user
    with unit_of_work() as session:
        session.delete(installer)
        if user is not None:
            session.delete(user)

    logger.info('Installer %s and its user account deleted', installer_id)
