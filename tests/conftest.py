"""
Pytest configuration and fixtures for the varmepumpe backend tests
"""
import os
from types import SimpleNamespace

import pytest

from varmepumpe import create_app, db
from varmepumpe.models import Installer, ServiceArea, ServiceRequest, User

DEFAULT_PASSWORD = 'secret1'


@pytest.fixture(scope='function')
def app():
    """Fresh application and in-memory database for each test"""
    os.environ['FLASK_ENV'] = 'testing'
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def user_factory(app):
    """Create users directly in the database; returns id, username and password"""
    counter = {'n': 0}

    def _create_user(username=None, role='customer', password=DEFAULT_PASSWORD, **kwargs):
        counter['n'] += 1
        username = username or f'{role}{counter["n"]}'
        with app.app_context():
            user = User(
                username=username,
                email=kwargs.pop('email', f'{username}@example.no'),
                first_name=kwargs.pop('first_name', 'Test'),
                last_name=kwargs.pop('last_name', role.title()),
                role=role,
                **kwargs
            )
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return SimpleNamespace(id=user.id, username=username, password=password, role=role)

    return _create_user


@pytest.fixture
def admin_user(user_factory):
    return user_factory(username='admin', role='admin', password='adminpass')


@pytest.fixture
def installer_factory(app, user_factory):
    """
    Create an installer user plus company profile.

    ``areas`` is a list of (county, municipality) service area pairs.
    """
    counter = {'n': 0}

    def _create_installer(username=None, company_name=None, org_number=None,
                          approved=True, active=True, rating=0, areas=(), **kwargs):
        counter['n'] += 1
        n = counter['n']
        user = user_factory(username=username or f'installer{n}', role='installer')
        with app.app_context():
            installer = Installer(
                user_id=user.id,
                company_name=company_name or f'Varmeteknikk {n} AS',
                org_number=org_number or f'{900000000 + n}',
                contact_person='Test Installer',
                email=f'{user.username}@example.no',
                phone='91234567',
                approved=approved,
                active=active,
                rating=rating,
                **kwargs
            )
            db.session.add(installer)
            db.session.flush()
            for county, municipality in areas:
                db.session.add(ServiceArea(installer_id=installer.id, county=county,
                                           municipality=municipality))
            db.session.commit()
            return SimpleNamespace(id=installer.id, user_id=user.id, username=user.username,
                                   password=user.password, company_name=installer.company_name)

    return _create_installer


@pytest.fixture
def service_request_factory(app):
    def _create_request(**kwargs):
        defaults = {
            'full_name': 'Ola Nordmann',
            'phone': '91234567',
            'address': 'Strandkaien 1',
            'postal_code': '5013',
            'city': 'Bergen',
            'county': 'Vestland',
            'municipality': 'Bergen',
            'service_type': 'Årlig service',
            'status': 'open',
        }
        defaults.update(kwargs)
        with app.app_context():
            service_request = ServiceRequest(**defaults)
            db.session.add(service_request)
            db.session.commit()
            return service_request.id

    return _create_request


@pytest.fixture
def login(client):
    """Log the test client in through the API"""
    def _login(account, password=None):
        response = client.post('/api/login', json={
            'username': account.username,
            'password': password or account.password,
        })
        assert response.status_code == 200, response.get_json()
        return response

    return _login


@pytest.fixture
def valid_registration():
    return {
        'username': 'varmeteknikk',
        'email': 'post@varmeteknikk.no',
        'password': 'secret1',
        'first_name': 'Kari',
        'last_name': 'Nordmann',
        'role': 'installer',
        'company_name': 'Varmeteknikk AS',
        'org_number': '912345678',
        'phone': '91234567',
        'county': 'Vestland',
        'municipality': 'Bergen',
    }
