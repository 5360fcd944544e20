"""
Service request lifecycle: public intake, admin edits and deletes,
installer contact events.
"""
import logging

from varmepumpe import db
from varmepumpe.errors import NotFoundError, PermissionDenied, ValidationError
from varmepumpe.models import ServiceArea, ServiceRequest, ServiceRequestContact
from varmepumpe.services import unit_of_work

logger = logging.getLogger(__name__)


def create_service_request(data):
    """
    Store a request from the public form.

    Args:
        data (ServiceRequestInput): validated form fields

    Returns:
        ServiceRequest: the new request, status 'open'
    """
    service_request = ServiceRequest(status='open', **data.as_dict())
    with unit_of_work() as session:
        session.add(service_request)

    logger.info('Service request %s created for %s/%s',
                service_request.id, service_request.county, service_request.municipality)
    return service_request


def get_service_request(request_id):
    service_request = db.session.get(ServiceRequest, request_id)
    if service_request is None:
        raise NotFoundError('Service request not found')
    return service_request


def list_service_requests():
    return ServiceRequest.query.order_by(
        ServiceRequest.created_at.desc(), ServiceRequest.id.desc()
    ).all()


def list_for_installer(installer_id):
    """
    Requests in the municipalities the installer has declared as service
    areas. The installer's own registered municipality is not used here.
    """
    municipalities = [
        municipality for (municipality,) in
        db.session.query(ServiceArea.municipality)
        .filter(ServiceArea.installer_id == installer_id)
        .distinct()
    ]
    if not municipalities:
        return []

    return (
        ServiceRequest.query
        .filter(ServiceRequest.municipality.in_(municipalities))
        .order_by(ServiceRequest.created_at.desc(), ServiceRequest.id.desc())
        .all()
    )


def update_service_request(request_id, update):
    """
    Overwrite the given fields (admin only). Last write wins.

    Args:
        update (ServiceRequestUpdate): validated partial fields
    """
    service_request = get_service_request(request_id)
    with unit_of_work():
        for key, value in update.changes.items():
            setattr(service_request, key, value)
        service_request.touch()

    logger.info('Service request %s updated: %s', request_id, ', '.join(sorted(update.changes)) or 'no fields')
    return service_request


def delete_service_request(request_id):
    """Delete a request together with its contact events"""
    service_request = get_service_request(request_id)
    with unit_of_work() as session:
        # contacts go with it through the relationship cascade
        session.delete(service_request)
    logger.info('Service request %s deleted', request_id)


def record_contact(request_id, installer, contact):
    """
    Record an installer's interest in a request.

    Every call appends a new row; an 'open' request becomes 'contacted'.

    Args:
        installer (Installer): the contacting installer
        contact (ContactInput): status, notes, optional quote
    """
    service_request = get_service_request(request_id)
    if not installer.is_visible:
        raise PermissionDenied('Installer account is not approved or is deactivated')
    if service_request.status == 'closed':
        raise ValidationError({'status': 'Service request is closed'})

    row = ServiceRequestContact(
        service_request=service_request,
        installer=installer,
        status=contact.status,
        notes=contact.notes,
        quote_amount=contact.quote_amount,
    )
    with unit_of_work() as session:
        session.add(row)
        if service_request.status == 'open':
            service_request.status = 'contacted'
            service_request.touch()

    logger.info('Installer %s contacted service request %s', installer.id, request_id)
    return row


def list_contacts(request_id, installer_id=None):
    """Contact events for a request, newest first; optionally one installer's only"""
    service_request = get_service_request(request_id)
    query = service_request.contacts
    if installer_id is not None:
        query = query.filter(ServiceRequestContact.installer_id == installer_id)
    return query.order_by(ServiceRequestContact.contacted_at.desc(),
                          ServiceRequestContact.id.desc()).all()
