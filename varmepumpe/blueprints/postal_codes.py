"""
Postal codes blueprint
Reference table lookups, editing and bulk import
"""
from flask import Blueprint, jsonify, request

from varmepumpe.schemas import PostalCodeImportInput, PostalCodeInput, PostalCodeUpdate
from varmepumpe.services import postal_codes as service
from varmepumpe.utils.permissions import role_required

postal_codes_bp = Blueprint('postal_codes', __name__)

editor_required = role_required('admin', 'installer')


@postal_codes_bp.route('', methods=['GET'])
def list_postal_codes():
    postal_codes = service.list_postal_codes()
    return jsonify({
        'postal_codes': [pc.to_dict() for pc in postal_codes],
        'total': len(postal_codes)
    }), 200


@postal_codes_bp.route('/search', methods=['GET'])
def search_postal_codes():
    """
    GET /api/postal-codes/search?q=berg
    """
    postal_codes = service.search(request.args.get('q', ''))
    return jsonify({
        'postal_codes': [pc.to_dict() for pc in postal_codes],
        'total': len(postal_codes)
    }), 200


@postal_codes_bp.route('/<code>', methods=['GET'])
def get_postal_code(code):
    postal_code = service.get_by_code(code)
    return jsonify({'postal_code': postal_code.to_dict()}), 200


@postal_codes_bp.route('', methods=['POST'])
@editor_required
def create_postal_code():
    """
    POST /api/postal-codes
    Body: {"postal_code": "5003", "post_place": "Bergen", "municipality": "Bergen", "county": "Vestland"}
    """
    data = PostalCodeInput.from_json(request.get_json(silent=True))
    postal_code = service.create_postal_code(data)
    return jsonify({
        'message': 'Postal code created',
        'postal_code': postal_code.to_dict()
    }), 201


@postal_codes_bp.route('/<int:postal_code_id>', methods=['PUT'])
@editor_required
def update_postal_code(postal_code_id):
    data = PostalCodeUpdate.from_json(request.get_json(silent=True))
    postal_code = service.update_postal_code(postal_code_id, data)
    return jsonify({
        'message': 'Postal code updated',
        'postal_code': postal_code.to_dict()
    }), 200


@postal_codes_bp.route('/<int:postal_code_id>', methods=['DELETE'])
@editor_required
def delete_postal_code(postal_code_id):
    service.delete_postal_code(postal_code_id)
    return jsonify({'message': 'Postal code deleted'}), 200


@postal_codes_bp.route('/import', methods=['POST'])
@editor_required
def import_postal_codes():
    """
    Bulk upsert of postal code rows

    POST /api/postal-codes/import
    Body: {"data": [{"postal_code": "5003", "post_place": "Bergen", ...}, ...]}
    """
    data = PostalCodeImportInput.from_json(request.get_json(silent=True))
    result = service.import_rows(data.rows)
    result['message'] = f'Imported {result["created"]} new and updated {result["updated"]} postal codes'
    return jsonify(result), 200
