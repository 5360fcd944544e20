"""
Service area management tests
"""
from varmepumpe import db
from varmepumpe.models import ServiceArea


def pairs(response):
    return sorted((a['county'], a['municipality']) for a in response.get_json()['service_areas'])


class TestAddAreas:

    def test_add_skips_existing_and_repeated_pairs(self, client, login, installer_factory):
        installer = installer_factory(areas=[('Vestland', 'Bergen')])
        login(installer)

        response = client.post('/api/service-areas', json={'service_areas': [
            {'county': 'Vestland', 'municipality': 'Bergen'},
            {'county': 'Vestland', 'municipality': 'Voss'},
            {'county': 'Vestland', 'municipality': 'Voss'},
        ]})

        assert response.status_code == 201
        assert pairs(response) == [('Vestland', 'Voss')]
        assert pairs(client.get('/api/service-areas/me')) == [('Vestland', 'Bergen'), ('Vestland', 'Voss')]

    def test_add_validates_entries(self, client, login, installer_factory):
        login(installer_factory())

        response = client.post('/api/service-areas', json={'service_areas': [{'county': 'Vestland'}]})

        assert response.status_code == 400
        assert 'service_areas[0].municipality' in response.get_json()['errors']

    def test_add_requires_list(self, client, login, installer_factory):
        login(installer_factory())

        response = client.post('/api/service-areas', json={'service_areas': 'Bergen'})

        assert response.status_code == 400

    def test_add_missing_key(self, client, login, installer_factory):
        login(installer_factory())

        response = client.post('/api/service-areas', json={'municipalities': []})

        assert response.status_code == 400
        assert 'service_areas' in response.get_json()['errors']


class TestReplaceAreas:

    def test_replace_all_is_idempotent(self, client, app, login, installer_factory):
        installer = installer_factory(areas=[('Rogaland', 'Stavanger')])
        login(installer)
        body = {'municipalities': [
            {'county': 'Vestland', 'municipality': 'Bergen'},
            {'county': 'Vestland', 'municipality': 'Bergen'},
            {'county': 'Vestland', 'municipality': 'Askøy'},
        ]}

        first = client.put('/api/service-areas/me', json=body)
        second = client.put('/api/service-areas/me', json=body)

        expected = [('Vestland', 'Askøy'), ('Vestland', 'Bergen')]
        assert first.status_code == second.status_code == 200
        assert pairs(first) == pairs(second) == expected
        with app.app_context():
            stored = ServiceArea.query.filter_by(installer_id=installer.id).all()
            assert sorted(area.pair for area in stored) == expected

    def test_replace_with_empty_list_clears(self, client, login, installer_factory):
        login(installer_factory(areas=[('Vestland', 'Bergen')]))

        response = client.put('/api/service-areas/me', json={'municipalities': []})

        assert response.get_json()['total'] == 0

    def test_invalid_body_keeps_existing_set(self, client, login, installer_factory):
        login(installer_factory(areas=[('Vestland', 'Bergen')]))

        response = client.put('/api/service-areas/me', json={'municipalities': [{'county': ''}]})

        assert response.status_code == 400
        assert pairs(client.get('/api/service-areas/me')) == [('Vestland', 'Bergen')]


class TestDeleteArea:

    def test_owner_can_delete(self, client, app, login, installer_factory):
        installer = installer_factory(areas=[('Vestland', 'Bergen')])
        with app.app_context():
            area_id = ServiceArea.query.filter_by(installer_id=installer.id).one().id
        login(installer)

        response = client.delete(f'/api/service-areas/{area_id}')

        assert response.status_code == 200
        with app.app_context():
            assert db.session.get(ServiceArea, area_id) is None

    def test_other_installer_forbidden(self, client, app, login, installer_factory):
        owner = installer_factory(areas=[('Vestland', 'Bergen')])
        intruder = installer_factory()
        with app.app_context():
            area_id = ServiceArea.query.filter_by(installer_id=owner.id).one().id
        login(intruder)

        response = client.delete(f'/api/service-areas/{area_id}')

        assert response.status_code == 403

    def test_missing_area(self, client, login, installer_factory):
        login(installer_factory())

        assert client.delete('/api/service-areas/999').status_code == 404


class TestListAreas:

    def test_admin_lists_any_installer(self, client, login, admin_user, installer_factory):
        installer = installer_factory(areas=[('Vestland', 'Bergen')])
        login(admin_user)

        response = client.get(f'/api/service-areas/installer/{installer.id}')

        assert pairs(response) == [('Vestland', 'Bergen')]

    def test_customer_forbidden(self, client, login, user_factory, installer_factory):
        installer = installer_factory()
        login(user_factory())

        assert client.get(f'/api/service-areas/installer/{installer.id}').status_code == 403
