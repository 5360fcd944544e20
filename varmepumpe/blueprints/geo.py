"""
Geography blueprint
County/municipality reference lists and address coordinates
"""
from flask import Blueprint, jsonify, request

from varmepumpe.data.locations import (
    get_all_counties,
    get_all_municipalities,
    get_county_by_municipality,
    get_municipalities_by_county,
)
from varmepumpe.errors import NotFoundError, ValidationError
from varmepumpe.services.geocoding import geocode

geo_bp = Blueprint('geo', __name__)


@geo_bp.route('/locations/counties', methods=['GET'])
def list_counties():
    return jsonify({'counties': get_all_counties()}), 200


@geo_bp.route('/locations/municipalities', methods=['GET'])
def list_municipalities():
    return jsonify({'municipalities': get_all_municipalities()}), 200


@geo_bp.route('/locations/counties/<county>/municipalities', methods=['GET'])
def list_county_municipalities(county):
    """Unknown counties give an empty list"""
    return jsonify({
        'county': county,
        'municipalities': get_municipalities_by_county(county)
    }), 200


@geo_bp.route('/locations/municipalities/<municipality>/county', methods=['GET'])
def municipality_county(municipality):
    county = get_county_by_municipality(municipality)
    if county is None:
        raise NotFoundError('Municipality not found')
    return jsonify({'municipality': municipality, 'county': county}), 200


@geo_bp.route('/coordinates', methods=['GET'])
def coordinates():
    """
    Best-effort coordinates for a map pin

    GET /api/coordinates?address=Strandkaien+1&postal_code=5013&city=Bergen
    """
    params = {key: (request.args.get(key) or '').strip() for key in ('address', 'postal_code', 'city')}
    missing = {key: f'{key} is required' for key, value in params.items() if not value}
    if missing:
        raise ValidationError(missing, message='Address, postal code and city are required')

    result = geocode(params['address'], params['postal_code'], params['city'])
    return jsonify(result.to_dict()), 200
