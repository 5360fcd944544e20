"""SQLAlchemy models package"""
from .user import User
from .installer import Installer
from .service_area import ServiceArea
from .service_request import ServiceRequest, ServiceRequestContact
from .customer import Customer, HeatPump, CustomerInstallerContact
from .postal_code import PostalCode

__all__ = [
    'User',
    'Installer',
    'ServiceArea',
    'ServiceRequest',
    'ServiceRequestContact',
    'Customer',
    'HeatPump',
    'CustomerInstallerContact',
    'PostalCode',
]
