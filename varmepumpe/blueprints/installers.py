"""
Installers blueprint
Public matching lookups, self-service profile and admin moderation
"""
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from varmepumpe.schemas import InstallerCreate, InstallerStatusInput, InstallerUpdate
from varmepumpe.services import accounts, matching
from varmepumpe.services import installers as service
from varmepumpe.utils.permissions import admin_required, installer_required

installers_bp = Blueprint('installers', __name__)


@installers_bp.route('', methods=['GET'])
def list_installers():
    """Approved and active installers"""
    installers = service.list_visible()
    return jsonify({
        'installers': [installer.to_dict() for installer in installers],
        'total': len(installers)
    }), 200


@installers_bp.route('', methods=['POST'])
@login_required
def create_installer():
    """
    Create the logged-in user's installer profile

    POST /api/installers
    Body: {
        "company_name": "Varmeteknikk AS",
        "org_number": "912345678",
        "phone": "91234567",
        "county": "Vestland",
        "municipality": "Bergen"
    }
    """
    data = InstallerCreate.from_json(request.get_json(silent=True))
    installer = service.create_installer(current_user, data)
    return jsonify({
        'message': 'Installer profile created',
        'installer': installer.to_dict()
    }), 201


@installers_bp.route('/municipality/<municipality>', methods=['GET'])
def installers_for_municipality(municipality):
    """
    Installers covering a municipality, best rated first

    GET /api/installers/municipality/Bergen
    """
    matches = matching.installers_for_municipality(municipality)
    return jsonify({
        'installers': [match.to_dict() for match in matches],
        'total': len(matches)
    }), 200


@installers_bp.route('/county/<county>', methods=['GET'])
def installers_for_county(county):
    """GET /api/installers/county/Vestland"""
    matches = matching.installers_for_county(county)
    return jsonify({
        'installers': [match.to_dict() for match in matches],
        'total': len(matches)
    }), 200


@installers_bp.route('/all', methods=['GET'])
@admin_required
def list_all_installers():
    installers = service.list_all()
    return jsonify({
        'installers': [installer.to_dict(include_username=True) for installer in installers],
        'total': len(installers)
    }), 200


@installers_bp.route('/pending', methods=['GET'])
@admin_required
def list_pending_installers():
    installers = service.list_pending()
    return jsonify({
        'installers': [installer.to_dict(include_username=True) for installer in installers],
        'total': len(installers)
    }), 200


@installers_bp.route('/me', methods=['GET'])
@installer_required
def get_own_profile():
    installer = accounts.get_installer_for_user(current_user)
    return jsonify({'installer': installer.to_dict()}), 200


@installers_bp.route('/me', methods=['PUT'])
@installers_bp.route('/profile', methods=['PUT'])
@installer_required
def update_own_profile():
    """
    Installer edits its own company profile. Approval, activation, rating
    and service count are admin-only and ignored here.

    PUT /api/installers/me
    Body: {"phone": "98765432", "website": "https://varmeteknikk.no"}
    """
    installer = accounts.get_installer_for_user(current_user)
    update = InstallerUpdate.from_json(request.get_json(silent=True))
    installer = service.update_installer(installer, update)
    return jsonify({
        'message': 'Profile updated successfully',
        'installer': installer.to_dict()
    }), 200


@installers_bp.route('/<int:installer_id>', methods=['GET'])
@admin_required
def get_installer(installer_id):
    installer = service.get_installer(installer_id)
    return jsonify({'installer': installer.to_dict(include_username=True)}), 200


@installers_bp.route('/<int:installer_id>', methods=['PUT'])
@admin_required
def update_installer(installer_id):
    """
    PUT /api/installers/<installer_id>
    Body: profile fields, plus approved / active / certified / rating / total_services
    """
    installer = service.get_installer(installer_id)
    update = InstallerUpdate.from_json(request.get_json(silent=True), admin=True)
    installer = service.update_installer(installer, update)
    return jsonify({
        'message': 'Installer updated successfully',
        'installer': installer.to_dict(include_username=True)
    }), 200


@installers_bp.route('/<int:installer_id>', methods=['DELETE'])
@admin_required
def delete_installer(installer_id):
    """
    GDPR erasure of an installer and its user account

    DELETE /api/installers/<installer_id>
    """
    service.delete_installer(installer_id)
    return jsonify({'message': 'Installer and all related data deleted'}), 200


@installers_bp.route('/<int:installer_id>/approve', methods=['POST'])
@admin_required
def approve_installer(installer_id):
    """
    POST /api/installers/<installer_id>/approve
    Body: {"approved": true}
    """
    data = InstallerStatusInput.from_json(request.get_json(silent=True), require='approved')
    installer = service.set_approval(installer_id, data.approved)
    return jsonify({
        'message': 'Installer approved' if data.approved else 'Installer approval revoked',
        'installer': installer.to_dict()
    }), 200


@installers_bp.route('/<int:installer_id>/status', methods=['POST'])
@admin_required
def set_installer_status(installer_id):
    """
    POST /api/installers/<installer_id>/status
    Body: {"active": false}
    """
    data = InstallerStatusInput.from_json(request.get_json(silent=True))
    installer, message = service.set_status(installer_id, approved=data.approved, active=data.active)
    return jsonify({
        'message': message,
        'installer': installer.to_dict()
    }), 200
