"""
Service requests blueprint
Public intake form, admin management and installer leads
"""
from flask import Blueprint, jsonify, request
from flask_login import current_user

from varmepumpe.schemas import ContactInput, ServiceRequestInput, ServiceRequestUpdate
from varmepumpe.services import accounts
from varmepumpe.services import service_requests as service
from varmepumpe.utils.permissions import admin_required, installer_required, role_required

service_requests_bp = Blueprint('service_requests', __name__)


@service_requests_bp.route('', methods=['POST'])
def create_service_request():
    """
    Submit a service request (no login needed)

    POST /api/service-requests
    Body: {
        "full_name": "Ola Nordmann",
        "phone": "91234567",
        "address": "Strandkaien 1",
        "postal_code": "5013",
        "city": "Bergen",
        "county": "Vestland",
        "municipality": "Bergen",
        "service_type": "Årlig service"
    }
    """
    data = ServiceRequestInput.from_json(request.get_json(silent=True))
    service_request = service.create_service_request(data)

    return jsonify({
        'message': 'Service request submitted',
        'service_request': service_request.to_dict()
    }), 201


@service_requests_bp.route('', methods=['GET'])
@admin_required
def list_service_requests():
    """GET /api/service-requests"""
    service_requests = service.list_service_requests()
    return jsonify({
        'service_requests': [sr.to_dict() for sr in service_requests],
        'total': len(service_requests)
    }), 200


@service_requests_bp.route('/installer', methods=['GET'])
@service_requests_bp.route('/for-installer', methods=['GET'])
@installer_required
def list_for_installer():
    """
    Requests in the logged-in installer's service areas

    GET /api/service-requests/installer
    """
    installer = accounts.get_installer_for_user(current_user)
    service_requests = service.list_for_installer(installer.id)
    return jsonify({
        'service_requests': [sr.to_dict() for sr in service_requests],
        'total': len(service_requests)
    }), 200


@service_requests_bp.route('/<int:request_id>', methods=['GET'])
@admin_required
def get_service_request(request_id):
    service_request = service.get_service_request(request_id)
    return jsonify({'service_request': service_request.to_dict()}), 200


@service_requests_bp.route('/<int:request_id>', methods=['PUT'])
@admin_required
def update_service_request(request_id):
    """
    PUT /api/service-requests/<request_id>
    Body: any request fields, and/or {"status": "closed"}
    """
    update = ServiceRequestUpdate.from_json(request.get_json(silent=True))
    service_request = service.update_service_request(request_id, update)
    return jsonify({
        'message': 'Service request updated',
        'service_request': service_request.to_dict()
    }), 200


@service_requests_bp.route('/<int:request_id>', methods=['DELETE'])
@admin_required
def delete_service_request(request_id):
    service.delete_service_request(request_id)
    return jsonify({'message': 'Service request deleted'}), 200


@service_requests_bp.route('/<int:request_id>/contact', methods=['POST'])
@installer_required
def contact_service_request(request_id):
    """
    Installer registers interest in a request

    POST /api/service-requests/<request_id>/contact
    Body: {"notes": "Kan komme torsdag", "quote_amount": 2490}
    """
    installer = accounts.get_installer_for_user(current_user)
    contact = ContactInput.from_json(request.get_json(silent=True))
    row = service.record_contact(request_id, installer, contact)
    return jsonify({
        'message': 'Contact registered',
        'contact': row.to_dict()
    }), 201


@service_requests_bp.route('/<int:request_id>/contacts', methods=['GET'])
@role_required('admin', 'installer')
def list_contacts(request_id):
    """Admins see every contact; installers only their own"""
    installer_id = None
    if current_user.is_installer():
        installer_id = accounts.get_installer_for_user(current_user).id
    contacts = service.list_contacts(request_id, installer_id=installer_id)
    return jsonify({
        'contacts': [contact.to_dict() for contact in contacts],
        'total': len(contacts)
    }), 200
