"""
Customer profiles, their heat pumps and customer/installer contacts,
plus the admin dashboard figures.
"""
import logging

from varmepumpe import db
from varmepumpe.errors import ConflictError, NotFoundError, PermissionDenied
from varmepumpe.models import (
    Customer,
    CustomerInstallerContact,
    HeatPump,
    Installer,
    ServiceRequest,
)
from varmepumpe.services import unit_of_work

logger = logging.getLogger(__name__)

MONTHLY_SUBSCRIPTION_NOK = 29


def get_customer(customer_id):
    customer = db.session.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError('Customer not found')
    return customer


def get_customer_for_user(user):
    customer = Customer.query.filter_by(user_id=user.id).first()
    if customer is None:
        raise NotFoundError('Customer profile not found')
    return customer


def list_customers():
    return Customer.query.order_by(Customer.created_at.desc(), Customer.id.desc()).all()


def create_customer(user, data):
    """
    Create the logged-in user's customer profile (one per user).

    Args:
        data (CustomerInput): complete profile values
    """
    if Customer.query.filter_by(user_id=user.id).first():
        raise ConflictError('Customer profile already exists', field='user_id')

    values = dict(data.values)
    if values.get('subscription_active') is None:
        values['subscription_active'] = True
    customer = Customer(user_id=user.id, **values)
    with unit_of_work() as session:
        session.add(customer)

    logger.info('Customer profile %s created for user %s', customer.id, user.id)
    return customer


def update_customer(customer_id, data):
    customer = get_customer(customer_id)
    with unit_of_work():
        for key, value in data.values.items():
            if value is not None:
                setattr(customer, key, value)
        customer.touch()
    logger.info('Customer %s updated', customer_id)
    return customer


def delete_customer(customer_id):
    """
    Remove a customer with its heat pumps and contacts. The linked user goes
    too when it is a plain customer account.
    """
    customer = get_customer(customer_id)
    user = customer.user
    with unit_of_work() as session:
        session.delete(customer)
        if user is not None and user.is_customer():
            session.delete(user)
    logger.info('Customer %s deleted', customer_id)


def _check_owner(user, customer):
    if user.is_admin():
        return
    if customer.user_id is None or customer.user_id != user.id:
        raise PermissionDenied('Access denied')


def add_heat_pump(user, data):
    """
    Register a heat pump on a customer the user owns (admins: any customer).

    Args:
        data (HeatPumpInput): validated heat pump fields
    """
    customer = get_customer(data.customer_id)
    _check_owner(user, customer)

    heat_pump = HeatPump(**data.as_dict())
    with unit_of_work() as session:
        session.add(heat_pump)
    logger.info('Heat pump %s added for customer %s', heat_pump.id, customer.id)
    return heat_pump


def list_heat_pumps(user, customer_id):
    customer = get_customer(customer_id)
    _check_owner(user, customer)
    return customer.heat_pumps.order_by(HeatPump.created_at.desc(), HeatPump.id.desc()).all()


def create_contact(user, data):
    """Record a customer/installer contact; customers may only use their own profile"""
    customer = get_customer(data.customer_id)
    _check_owner(user, customer)
    if db.session.get(Installer, data.installer_id) is None:
        raise NotFoundError('Installer not found')

    contact = CustomerInstallerContact(**data.as_dict())
    with unit_of_work() as session:
        session.add(contact)
    logger.info('Customer %s contacted installer %s', data.customer_id, data.installer_id)
    return contact


def admin_stats():
    """Dashboard figures; revenue is active subscriptions times the monthly price"""
    active_subscriptions = Customer.query.filter(Customer.subscription_active.is_(True)).count()
    return {
        'total_customers': Customer.query.count(),
        'approved_installers': Installer.query.filter(Installer.approved.is_(True)).count(),
        'pending_approvals': Installer.query.filter(Installer.approved.is_(False)).count(),
        'open_service_requests': ServiceRequest.query.filter_by(status='open').count(),
        'active_subscriptions': active_subscriptions,
        'monthly_revenue': active_subscriptions * MONTHLY_SUBSCRIPTION_NOK,
    }
