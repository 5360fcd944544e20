"""
Customers blueprint
Customer profiles, heat pumps and customer/installer contacts
"""
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from varmepumpe.schemas import CustomerContactInput, CustomerInput, HeatPumpInput
from varmepumpe.services import customers as service
from varmepumpe.utils.permissions import admin_required

customers_bp = Blueprint('customers', __name__)


@customers_bp.route('/customers', methods=['POST'])
@login_required
def create_customer():
    """
    Create the logged-in user's customer profile

    POST /api/customers
    Body: {
        "full_name": "Ola Nordmann",
        "email": "ola@example.no",
        "phone": "91234567",
        "address": "Strandkaien 1",
        "postal_code": "5013",
        "city": "Bergen",
        "county": "Vestland",
        "municipality": "Bergen"
    }
    """
    data = CustomerInput.from_json(request.get_json(silent=True))
    customer = service.create_customer(current_user, data)
    return jsonify({
        'message': 'Customer profile created',
        'customer': customer.to_dict()
    }), 201


@customers_bp.route('/customers/me', methods=['GET'])
@login_required
def get_own_customer():
    customer = service.get_customer_for_user(current_user)
    return jsonify({'customer': customer.to_dict()}), 200


@customers_bp.route('/customers', methods=['GET'])
@admin_required
def list_customers():
    customers = service.list_customers()
    return jsonify({
        'customers': [customer.to_dict() for customer in customers],
        'total': len(customers)
    }), 200


@customers_bp.route('/customers/<int:customer_id>', methods=['PUT'])
@admin_required
def update_customer(customer_id):
    data = CustomerInput.from_json(request.get_json(silent=True), partial=True)
    customer = service.update_customer(customer_id, data)
    return jsonify({
        'message': 'Customer updated',
        'customer': customer.to_dict()
    }), 200


@customers_bp.route('/customers/<int:customer_id>', methods=['DELETE'])
@admin_required
def delete_customer(customer_id):
    """
    GDPR erasure: the customer, its heat pumps, its contacts and its user

    DELETE /api/customers/<customer_id>
    """
    service.delete_customer(customer_id)
    return jsonify({'message': 'Customer and all related data deleted'}), 200


@customers_bp.route('/heat-pumps', methods=['POST'])
@login_required
def add_heat_pump():
    """
    POST /api/heat-pumps
    Body: {"customer_id": 1, "brand": "Mitsubishi", "model": "Kaiteki", "last_service_date": "2024-05-01"}
    """
    data = HeatPumpInput.from_json(request.get_json(silent=True))
    heat_pump = service.add_heat_pump(current_user, data)
    return jsonify({
        'message': 'Heat pump registered',
        'heat_pump': heat_pump.to_dict()
    }), 201


@customers_bp.route('/heat-pumps/customer/<int:customer_id>', methods=['GET'])
@login_required
def list_heat_pumps(customer_id):
    heat_pumps = service.list_heat_pumps(current_user, customer_id)
    return jsonify({
        'heat_pumps': [heat_pump.to_dict() for heat_pump in heat_pumps],
        'total': len(heat_pumps)
    }), 200


@customers_bp.route('/contacts', methods=['POST'])
@login_required
def create_contact():
    """
    POST /api/contacts
    Body: {"customer_id": 1, "installer_id": 2, "notes": "Ønsker befaring"}
    """
    data = CustomerContactInput.from_json(request.get_json(silent=True))
    contact = service.create_contact(current_user, data)
    return jsonify({
        'message': 'Contact registered',
        'contact': contact.to_dict()
    }), 201
