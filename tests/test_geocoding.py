"""
Geocoding fallback chain tests; HTTP calls are replaced with doubles
"""
import pytest
import requests

from varmepumpe.services import geocoding


class FakeResponse:

    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} error')

    def json(self):
        return self.payload


@pytest.fixture
def fake_get(monkeypatch):
    """Route requests.get by URL to canned responses and record the calls"""
    calls = []
    routes = {}

    def _get(url, params=None, headers=None, timeout=None):
        calls.append({'url': url, 'params': params, 'headers': headers, 'timeout': timeout})
        handler = routes.get(url)
        if handler is None:
            raise requests.ConnectionError('no route')
        return handler(params)

    monkeypatch.setattr(geocoding.requests, 'get', _get)
    return routes, calls


KARTVERKET_HIT = {
    'adresser': [{
        'adressetekst': 'Strandkaien 1',
        'postnummer': '5013',
        'poststed': 'BERGEN',
        'representasjonspunkt': {'lat': 60.3951, 'lon': 5.3221},
    }]
}


class TestGeocodeChain:

    def test_kartverket_first(self, app, fake_get):
        routes, calls = fake_get
        routes[app.config['KARTVERKET_URL']] = lambda params: FakeResponse(KARTVERKET_HIT)

        with app.app_context():
            result = geocoding.geocode('Strandkaien 1', '5013', 'Bergen')

        assert result.source == 'Kartverket'
        assert (result.lat, result.lng) == (60.3951, 5.3221)
        assert result.found_address == 'Strandkaien 1 5013 BERGEN'
        assert calls[0]['params'] == {'sok': 'Strandkaien 1, 5013 Bergen', 'treffPerSide': 1}
        assert calls[0]['timeout'] == app.config['GEOCODER_TIMEOUT']

    def test_kartverket_tries_next_variant(self, app, fake_get):
        routes, calls = fake_get

        def kartverket(params):
            if params['sok'] == 'Strandkaien 1 5013':
                return FakeResponse(KARTVERKET_HIT)
            return FakeResponse({'adresser': []})

        routes[app.config['KARTVERKET_URL']] = kartverket

        with app.app_context():
            result = geocoding.geocode('Strandkaien 1', '5013', 'Bergen')

        assert result.source == 'Kartverket'
        assert len(calls) == 2

    def test_falls_back_to_nominatim(self, app, fake_get):
        routes, calls = fake_get
        routes[app.config['KARTVERKET_URL']] = lambda params: FakeResponse({}, status_code=503)
        routes[app.config['NOMINATIM_URL']] = lambda params: FakeResponse(
            [{'lat': '60.39', 'lon': '5.32', 'display_name': 'Strandkaien, Bergen'}]
        )

        with app.app_context():
            result = geocoding.geocode('Strandkaien 1', '5013', 'Bergen')

        assert result.source == 'OpenStreetMap'
        assert result.lat == pytest.approx(60.39)
        nominatim_call = [c for c in calls if c['url'] == app.config['NOMINATIM_URL']][0]
        assert nominatim_call['params']['countrycodes'] == 'no'
        assert nominatim_call['params']['q'].endswith(', Norway')
        assert 'User-Agent' in nominatim_call['headers']

    def test_malformed_payload_is_skipped(self, app, fake_get):
        routes, _ = fake_get
        routes[app.config['KARTVERKET_URL']] = lambda params: FakeResponse({'adresser': [{'no': 'point'}]})
        routes[app.config['NOMINATIM_URL']] = lambda params: FakeResponse([])

        with app.app_context():
            result = geocoding.geocode('Strandkaien 1', '5013', 'Bergen')

        assert result.source == 'Oslo-Center-Fallback'

    def test_unexpected_payload_shape_is_skipped(self, app, fake_get):
        routes, _ = fake_get
        routes[app.config['KARTVERKET_URL']] = lambda params: FakeResponse(['not', 'an', 'object'])
        routes[app.config['NOMINATIM_URL']] = lambda params: FakeResponse({'lat': '60.39'})

        with app.app_context():
            result = geocoding.geocode('Strandkaien 1', '5013', 'Bergen')

        assert result.source == 'Oslo-Center-Fallback'

    def test_hit_that_is_not_an_object_is_skipped(self, app, fake_get):
        routes, _ = fake_get
        routes[app.config['KARTVERKET_URL']] = lambda params: FakeResponse({'adresser': ['Strandkaien 1']})
        routes[app.config['NOMINATIM_URL']] = lambda params: FakeResponse(['Strandkaien 1'])

        with app.app_context():
            result = geocoding.geocode('Strandkaien 1', '5013', 'Bergen')

        assert result.source == 'Oslo-Center-Fallback'

    def test_postal_code_table_fallback(self, app, fake_get):
        with app.app_context():
            result = geocoding.geocode('Ukjent vei 1', '0582', 'Oslo')

        assert result.source == 'PostalCode-Fallback'
        assert result.warning
        assert (result.lat, result.lng) == (59.928534, 10.831278)

    def test_oslo_centre_last(self, app, fake_get):
        with app.app_context():
            result = geocoding.geocode('Ukjent vei 1', '9999', 'Ingensteds')

        assert result.to_dict() == {
            'lat': 59.9139,
            'lng': 10.7522,
            'source': 'Oslo-Center-Fallback',
            'warning': result.warning,
        }


class TestCoordinatesEndpoint:

    def test_requires_all_params(self, client):
        response = client.get('/api/coordinates?address=Strandkaien+1')

        assert response.status_code == 400
        assert set(response.get_json()['errors']) == {'postal_code', 'city'}

    def test_returns_result(self, client, app, fake_get):
        routes, _ = fake_get
        routes[app.config['KARTVERKET_URL']] = lambda params: FakeResponse(KARTVERKET_HIT)

        response = client.get('/api/coordinates?address=Strandkaien+1&postal_code=5013&city=Bergen')

        assert response.status_code == 200
        assert response.get_json()['source'] == 'Kartverket'

    def test_unexpected_payload_shape_still_answers(self, client, app, fake_get):
        routes, _ = fake_get
        routes[app.config['KARTVERKET_URL']] = lambda params: FakeResponse('unavailable')
        routes[app.config['NOMINATIM_URL']] = lambda params: FakeResponse({'error': 'rate limited'})

        response = client.get('/api/coordinates?address=Strandkaien+1&postal_code=0582&city=Oslo')

        assert response.status_code == 200
        assert response.get_json()['source'] == 'PostalCode-Fallback'
