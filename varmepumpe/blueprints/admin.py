"""
Admin blueprint
Dashboard statistics and password overrides
"""
from flask import Blueprint, jsonify, request

from varmepumpe.schemas import AdminPasswordInput
from varmepumpe.services import accounts, customers
from varmepumpe.utils.permissions import admin_required

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/stats', methods=['GET'])
@admin_required
def stats():
    """
    Dashboard figures

    GET /api/admin/stats
    """
    return jsonify({'stats': customers.admin_stats()}), 200


@admin_bp.route('/reset-password', methods=['POST'])
@admin_required
def reset_user_password():
    """
    POST /api/admin/reset-password
    Body: {"user_id": 4, "new_password": "..."}
    """
    data = AdminPasswordInput.from_json(request.get_json(silent=True))
    user = accounts.set_password(data.user_id, data.new_password)
    return jsonify({'message': f'Password reset for {user.username}'}), 200
