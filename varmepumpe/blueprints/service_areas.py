"""
Service areas blueprint
Installers declare the (county, municipality) pairs they cover
"""
from flask import Blueprint, jsonify, request
from flask_login import current_user

from varmepumpe.schemas import ServiceAreaInput
from varmepumpe.services import accounts
from varmepumpe.services import installers as installer_service
from varmepumpe.services import service_areas as service
from varmepumpe.utils.permissions import installer_required, role_required

service_areas_bp = Blueprint('service_areas', __name__)


def _areas_response(areas, status=200, message=None):
    payload = {
        'service_areas': [area.to_dict() for area in areas],
        'total': len(areas)
    }
    if message:
        payload['message'] = message
    return jsonify(payload), status


@service_areas_bp.route('/me', methods=['GET'])
@installer_required
def list_own_areas():
    installer = accounts.get_installer_for_user(current_user)
    return _areas_response(service.list_areas(installer.id))


@service_areas_bp.route('/installer/<int:installer_id>', methods=['GET'])
@role_required('admin', 'installer')
def list_installer_areas(installer_id):
    installer = installer_service.get_installer(installer_id)
    return _areas_response(service.list_areas(installer.id))


@service_areas_bp.route('', methods=['POST'])
@installer_required
def add_areas():
    """
    Add service areas; pairs already covered are skipped

    POST /api/service-areas
    Body: {"service_areas": [{"county": "Vestland", "municipality": "Bergen"}]}
    """
    areas = ServiceAreaInput.list_from_body(request.get_json(silent=True), 'service_areas')
    installer = accounts.get_installer_for_user(current_user)
    created = service.add_areas(installer, areas)
    return _areas_response(created, status=201, message=f'{len(created)} service area(s) added')


@service_areas_bp.route('/me', methods=['PUT'])
@installer_required
def replace_areas():
    """
    Replace every service area of the logged-in installer

    PUT /api/service-areas/me
    Body: {"municipalities": [{"county": "Vestland", "municipality": "Bergen"}]}
    """
    areas = ServiceAreaInput.list_from_body(request.get_json(silent=True), 'municipalities')
    installer = accounts.get_installer_for_user(current_user)
    saved = service.replace_areas(installer, areas)
    return _areas_response(saved, message='Service areas saved')


@service_areas_bp.route('/<int:area_id>', methods=['DELETE'])
@installer_required
def delete_area(area_id):
    installer = accounts.get_installer_for_user(current_user)
    service.delete_area(installer, area_id)
    return jsonify({'message': 'Service area deleted'}), 200
