"""
Postal code reference table tests
"""
from varmepumpe import db
from varmepumpe.models import PostalCode
from varmepumpe.services.postal_codes import seed_postal_codes


def add_code(app, postal_code, post_place='Bergen', municipality='Bergen', county='Vestland'):
    with app.app_context():
        row = PostalCode(postal_code=postal_code, post_place=post_place,
                         municipality=municipality, county=county)
        db.session.add(row)
        db.session.commit()
        return row.id


class TestLookup:

    def test_get_by_code(self, client, app):
        add_code(app, '5003')

        response = client.get('/api/postal-codes/5003')

        assert response.status_code == 200
        assert response.get_json()['postal_code']['post_place'] == 'Bergen'

    def test_unknown_code(self, client):
        assert client.get('/api/postal-codes/0000').status_code == 404

    def test_search_matches_code_and_place(self, client, app):
        add_code(app, '5003')
        add_code(app, '0150', post_place='Oslo', municipality='Oslo', county='Oslo')

        by_place = client.get('/api/postal-codes/search?q=BERG').get_json()
        by_code = client.get('/api/postal-codes/search?q=015').get_json()

        assert [pc['postal_code'] for pc in by_place['postal_codes']] == ['5003']
        assert [pc['postal_code'] for pc in by_code['postal_codes']] == ['0150']

    def test_search_is_capped(self, client, app):
        for n in range(60):
            add_code(app, f'{5000 + n}')

        response = client.get('/api/postal-codes/search?q=Bergen')

        assert response.get_json()['total'] == 50

    def test_empty_search(self, client):
        assert client.get('/api/postal-codes/search?q=').get_json()['total'] == 0


class TestEditing:

    def test_installer_can_create(self, client, login, installer_factory):
        login(installer_factory())

        response = client.post('/api/postal-codes', json={
            'postal_code': '5003', 'post_place': 'Bergen',
            'municipality': 'Bergen', 'county': 'Vestland',
        })

        assert response.status_code == 201

    def test_customer_cannot_edit(self, client, login, user_factory):
        login(user_factory())

        response = client.post('/api/postal-codes', json={
            'postal_code': '5003', 'post_place': 'Bergen',
            'municipality': 'Bergen', 'county': 'Vestland',
        })

        assert response.status_code == 403

    def test_duplicate_code_conflict(self, client, app, login, admin_user):
        add_code(app, '5003')
        login(admin_user)

        response = client.post('/api/postal-codes', json={
            'postal_code': '5003', 'post_place': 'Bergen',
            'municipality': 'Bergen', 'county': 'Vestland',
        })

        assert response.status_code == 400
        assert response.get_json()['field'] == 'postal_code'

    def test_update_and_delete(self, client, app, login, admin_user):
        row_id = add_code(app, '5003')
        login(admin_user)

        updated = client.put(f'/api/postal-codes/{row_id}', json={'post_place': 'Bergen sentrum'})
        deleted = client.delete(f'/api/postal-codes/{row_id}')

        assert updated.get_json()['postal_code']['post_place'] == 'Bergen sentrum'
        assert deleted.status_code == 200
        with app.app_context():
            assert db.session.get(PostalCode, row_id) is None

    def test_update_rejects_bad_code(self, client, app, login, admin_user):
        row_id = add_code(app, '5003')
        login(admin_user)

        response = client.put(f'/api/postal-codes/{row_id}', json={'postal_code': '50033'})

        assert response.status_code == 400

    def test_update_needs_object_body(self, client, app, login, admin_user):
        row_id = add_code(app, '5003')
        login(admin_user)

        response = client.put(f'/api/postal-codes/{row_id}', json=['5004'])

        assert response.status_code == 400
        with app.app_context():
            assert db.session.get(PostalCode, row_id).postal_code == '5003'


class TestImport:

    def test_invalid_row_reported_by_number(self, client, app, login, admin_user):
        add_code(app, '5003', post_place='Gammelt navn')
        login(admin_user)

        response = client.post('/api/postal-codes/import', json={'data': [
            {'postal_code': '5003', 'post_place': 'Bergen', 'municipality': 'Bergen', 'county': 'Vestland'},
            {'postal_code': '0150', 'post_place': 'Oslo', 'municipality': 'Oslo', 'county': 'Oslo'},
            {'postal_code': '', 'post_place': 'Ingensteds', 'municipality': 'Bergen', 'county': 'Vestland'},
            {'postal_code': '7010', 'post_place': 'Trondheim', 'municipality': 'Trondheim', 'county': 'Trøndelag'},
        ]})

        assert response.status_code == 200
        data = response.get_json()
        assert data['created'] == 2
        assert data['updated'] == 1
        assert data['error_count'] == 1
        assert data['errors'][0].startswith('Row 3:')
        with app.app_context():
            assert PostalCode.query.count() == 3
            assert PostalCode.query.filter_by(postal_code='5003').one().post_place == 'Bergen'

    def test_update_by_id(self, client, app, login, admin_user):
        row_id = add_code(app, '5003')
        login(admin_user)

        response = client.post('/api/postal-codes/import', json={'data': [
            {'id': row_id, 'postal_code': '5004', 'post_place': 'Bergen',
             'municipality': 'Bergen', 'county': 'Vestland'},
        ]})

        assert response.get_json()['updated'] == 1
        with app.app_context():
            assert db.session.get(PostalCode, row_id).postal_code == '5004'

    def test_error_list_is_capped(self, client, login, admin_user):
        login(admin_user)
        rows = [{'postal_code': 'x'} for _ in range(15)]

        data = client.post('/api/postal-codes/import', json={'data': rows}).get_json()

        assert data['error_count'] == 15
        assert len(data['errors']) == 10
        assert data['created'] == data['updated'] == 0

    def test_data_must_be_list(self, client, login, admin_user):
        login(admin_user)

        response = client.post('/api/postal-codes/import', json={'data': {'postal_code': '5003'}})

        assert response.status_code == 400

    def test_missing_data_key(self, client, login, admin_user):
        login(admin_user)

        response = client.post('/api/postal-codes/import', json={'rows': []})

        assert response.status_code == 400
        assert 'data' in response.get_json()['errors']


class TestSeed:

    def test_seed_only_when_empty(self, app):
        with app.app_context():
            inserted = seed_postal_codes()
            again = seed_postal_codes()

            assert inserted > 0
            assert again == 0
            assert PostalCode.query.count() == inserted
