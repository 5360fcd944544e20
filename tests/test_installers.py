"""
Installer profile, moderation and GDPR erasure tests
"""
import pytest

from varmepumpe import db
from varmepumpe.models import (
    Installer,
    ServiceArea,
    ServiceRequestContact,
    User,
)


class TestPublicListing:

    def test_only_visible_installers(self, client, installer_factory):
        visible = installer_factory()
        installer_factory(approved=False)
        installer_factory(active=False)

        response = client.get('/api/installers')

        assert [i['id'] for i in response.get_json()['installers']] == [visible.id]


class TestSelfService:

    def test_get_own_profile(self, client, login, installer_factory):
        installer = installer_factory()
        login(installer)

        response = client.get('/api/installers/me')

        assert response.status_code == 200
        assert response.get_json()['installer']['company_name'] == installer.company_name

    def test_update_own_profile(self, client, login, installer_factory):
        installer = installer_factory()
        login(installer)

        response = client.put('/api/installers/me', json={'phone': '98765432', 'city': 'Bergen'})

        assert response.status_code == 200
        data = response.get_json()['installer']
        assert data['phone'] == '98765432'
        assert data['city'] == 'Bergen'

    def test_cannot_approve_self(self, client, app, login, installer_factory):
        installer = installer_factory(approved=False)
        login(installer)

        client.put('/api/installers/profile', json={'approved': True, 'rating': 5, 'website': 'https://x.no'})

        with app.app_context():
            stored = db.session.get(Installer, installer.id)
            assert stored.approved is False
            assert float(stored.rating) == 0
            assert stored.website == 'https://x.no'

    def test_update_rechecks_uniqueness(self, client, login, installer_factory):
        installer_factory(company_name='Taken AS', org_number='911111111')
        installer = installer_factory()
        login(installer)

        by_name = client.put('/api/installers/me', json={'company_name': 'Taken AS'})
        by_number = client.put('/api/installers/me', json={'org_number': '911111111'})

        assert by_name.status_code == 400
        assert by_name.get_json()['field'] == 'company_name'
        assert by_number.status_code == 400
        assert by_number.get_json()['field'] == 'org_number'

    def test_keeping_own_company_name_is_fine(self, client, login, installer_factory):
        installer = installer_factory(company_name='Egen Varme AS')
        login(installer)

        response = client.put('/api/installers/me', json={'company_name': 'Egen Varme AS'})

        assert response.status_code == 200

    def test_required_field_cannot_be_blanked(self, client, login, installer_factory):
        login(installer_factory())

        response = client.put('/api/installers/me', json={'contact_person': '  '})

        assert response.status_code == 400


class TestCreateProfile:

    PROFILE = {
        'company_name': 'Fjordvarme AS',
        'org_number': '923456789',
        'phone': '91234567',
        'county': 'Vestland',
        'municipality': 'Bergen',
    }

    def test_create_for_logged_in_user(self, client, app, login, user_factory):
        user = user_factory(first_name='Kari', last_name='Nordmann')
        login(user)

        response = client.post('/api/installers', json=self.PROFILE)

        assert response.status_code == 201
        data = response.get_json()['installer']
        assert data['company_name'] == 'Fjordvarme AS'
        assert data['contact_person'] == 'Kari Nordmann'
        assert data['email'] == f'{user.username}@example.no'
        assert data['status'] == 'active'
        with app.app_context():
            assert Installer.query.filter_by(user_id=user.id).count() == 1

    def test_waits_for_approval_without_auto_approve(self, client, app, login, user_factory):
        app.config['INSTALLER_AUTO_APPROVE'] = False
        login(user_factory())

        response = client.post('/api/installers', json=self.PROFILE)

        assert response.get_json()['installer']['status'] == 'pending'

    def test_company_name_taken(self, client, login, user_factory, installer_factory):
        installer_factory(company_name='Fjordvarme AS')
        login(user_factory())

        response = client.post('/api/installers', json=self.PROFILE)

        assert response.status_code == 400
        assert response.get_json()['field'] == 'company_name'

    def test_org_number_taken(self, client, login, user_factory, installer_factory):
        installer_factory(org_number='923456789')
        login(user_factory())

        response = client.post('/api/installers', json=self.PROFILE)

        assert response.status_code == 400
        assert response.get_json()['field'] == 'org_number'

    def test_one_profile_per_user(self, client, login, installer_factory):
        login(installer_factory())

        response = client.post('/api/installers', json=self.PROFILE)

        assert response.status_code == 400
        assert response.get_json()['field'] == 'user_id'

    def test_invalid_fields(self, client, login, user_factory):
        login(user_factory())

        response = client.post('/api/installers', json={'company_name': 'Fjordvarme AS',
                                                       'org_number': '123', 'phone': 'abc'})

        assert response.status_code == 400
        assert set(response.get_json()['errors']) == {'org_number', 'phone'}

    def test_requires_login(self, client):
        assert client.post('/api/installers', json=self.PROFILE).status_code == 401


class TestModeration:

    def test_pending_list(self, client, login, admin_user, installer_factory):
        pending = installer_factory(approved=False)
        installer_factory()
        login(admin_user)

        response = client.get('/api/installers/pending')

        installers = response.get_json()['installers']
        assert [i['id'] for i in installers] == [pending.id]
        assert installers[0]['username'] == pending.username
        assert installers[0]['status'] == 'pending'

    def test_all_includes_username(self, client, login, admin_user, installer_factory):
        installer = installer_factory()
        login(admin_user)

        response = client.get('/api/installers/all')

        assert response.get_json()['installers'][0]['username'] == installer.username

    def test_approve(self, client, login, admin_user, installer_factory):
        installer = installer_factory(approved=False)
        login(admin_user)

        response = client.post(f'/api/installers/{installer.id}/approve', json={'approved': True})

        assert response.status_code == 200
        assert response.get_json()['installer']['status'] == 'active'
        assert client.get('/api/installers').get_json()['total'] == 1

    def test_approve_requires_flag(self, client, login, admin_user, installer_factory):
        installer = installer_factory(approved=False)
        login(admin_user)

        response = client.post(f'/api/installers/{installer.id}/approve', json={'active': True})

        assert response.status_code == 400

    def test_deactivate_and_reactivate(self, client, login, admin_user, installer_factory):
        installer = installer_factory()
        login(admin_user)

        off = client.post(f'/api/installers/{installer.id}/status', json={'active': False})
        on = client.post(f'/api/installers/{installer.id}/status', json={'active': True})

        assert off.get_json()['message'] == 'Installer deactivated'
        assert off.get_json()['installer']['status'] == 'deactivated'
        assert on.get_json()['message'] == 'Installer activated'
        assert on.get_json()['installer']['status'] == 'active'

    def test_status_needs_a_flag(self, client, login, admin_user, installer_factory):
        installer = installer_factory()
        login(admin_user)

        response = client.post(f'/api/installers/{installer.id}/status', json={})

        assert response.status_code == 400

    def test_admin_update_sets_rating(self, client, login, admin_user, installer_factory):
        installer = installer_factory()
        login(admin_user)

        response = client.put(f'/api/installers/{installer.id}',
                              json={'rating': 4.5, 'certified': True, 'total_services': 12})

        data = response.get_json()['installer']
        assert data['rating'] == 4.5
        assert data['certified'] is True
        assert data['total_services'] == 12

    def test_rating_out_of_range(self, client, login, admin_user, installer_factory):
        installer = installer_factory()
        login(admin_user)

        response = client.put(f'/api/installers/{installer.id}', json={'rating': 7})

        assert response.status_code == 400

    @pytest.mark.parametrize('key', ['approved', 'active', 'certified', 'rating'])
    def test_admin_update_rejects_null(self, client, app, login, admin_user, installer_factory, key):
        installer = installer_factory()
        login(admin_user)

        response = client.put(f'/api/installers/{installer.id}', json={key: None})

        assert response.status_code == 400
        assert key in response.get_json()['errors']
        with app.app_context():
            stored = db.session.get(Installer, installer.id)
            assert stored.approved is True
            assert stored.active is True

    def test_moderation_requires_admin(self, client, login, installer_factory):
        installer = installer_factory()
        login(installer)

        response = client.post(f'/api/installers/{installer.id}/status', json={'active': True})

        assert response.status_code == 403

    def test_unknown_installer(self, client, login, admin_user):
        login(admin_user)

        assert client.post('/api/installers/999/approve', json={'approved': True}).status_code == 404


class TestDeleteInstaller:

    def test_delete_leaves_no_orphans(self, client, app, login, admin_user, installer_factory,
                                      service_request_factory):
        installer = installer_factory(areas=[('Vestland', 'Bergen'), ('Vestland', 'Voss')])
        other = installer_factory(areas=[('Vestland', 'Bergen')])
        request_id = service_request_factory()
        for account in (installer, other):
            login(account)
            client.post(f'/api/service-requests/{request_id}/contact', json={})
            client.post('/api/logout')
        login(admin_user)

        response = client.delete(f'/api/installers/{installer.id}')

        assert response.status_code == 200
        with app.app_context():
            assert db.session.get(Installer, installer.id) is None
            assert db.session.get(User, installer.user_id) is None
            assert ServiceArea.query.filter_by(installer_id=installer.id).count() == 0
            assert ServiceRequestContact.query.filter_by(installer_id=installer.id).count() == 0
            # the other installer is untouched
            assert ServiceArea.query.filter_by(installer_id=other.id).count() == 1
            assert ServiceRequestContact.query.filter_by(installer_id=other.id).count() == 1

    def test_delete_unknown(self, client, login, admin_user):
        login(admin_user)

        assert client.delete('/api/installers/999').status_code == 404
