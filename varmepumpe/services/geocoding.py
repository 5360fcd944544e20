"""
Best-effort address geocoding for map pins.

Tries Kartverket, then OpenStreetMap Nominatim, then the static postal code
table, and finally the centre of Oslo. ``geocode`` never raises.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import requests
from flask import current_app

from varmepumpe.data.coordinates import OSLO_CENTER, lookup_postal_code

logger = logging.getLogger(__name__)

SOURCE_KARTVERKET = 'Kartverket'
SOURCE_NOMINATIM = 'OpenStreetMap'
SOURCE_POSTAL_CODE = 'PostalCode-Fallback'
SOURCE_DEFAULT = 'Oslo-Center-Fallback'


@dataclass
class GeocodeResult:
    lat: float
    lng: float
    source: str
    found_address: Optional[str] = None
    warning: Optional[str] = None

    def to_dict(self):
        data = {'lat': self.lat, 'lng': self.lng, 'source': self.source}
        if self.found_address:
            data['found_address'] = self.found_address
        if self.warning:
            data['warning'] = self.warning
        return data


def _kartverket_queries(address, postal_code, city):
    return [
        f'{address}, {postal_code} {city}',
        f'{address} {postal_code}',
        f'{address}, {city}',
        f'{postal_code} {city}',
    ]


def _nominatim_queries(address, postal_code, city):
    return [f'{query}, Norway' for query in _kartverket_queries(address, postal_code, city)]


def _get_json(url, params, headers=None):
    response = requests.get(
        url,
        params=params,
        headers=headers,
        timeout=current_app.config['GEOCODER_TIMEOUT'],
    )
    response.raise_for_status()
    return response.json()


def _from_kartverket(query):
    data = _get_json(current_app.config['KARTVERKET_URL'], {'sok': query, 'treffPerSide': 1})
    if not isinstance(data, dict):
        return None
    hits = data.get('adresser') or []
    if not hits:
        return None

    hit = hits[0]
    point = hit['representasjonspunkt']
    found = ' '.join(
        part for part in (hit.get('adressetekst'), hit.get('postnummer'), hit.get('poststed')) if part
    )
    return GeocodeResult(
        lat=float(point['lat']),
        lng=float(point['lon']),
        source=SOURCE_KARTVERKET,
        found_address=found or None,
    )


def _from_nominatim(query):
    data = _get_json(
        current_app.config['NOMINATIM_URL'],
        {'format': 'json', 'countrycodes': 'no', 'q': query, 'limit': 1},
        headers={'User-Agent': current_app.config['GEOCODER_USER_AGENT']},
    )
    if not isinstance(data, list) or not data:
        return None

    hit = data[0]
    return GeocodeResult(
        lat=float(hit['lat']),
        lng=float(hit['lon']),
        source=SOURCE_NOMINATIM,
        found_address=hit.get('display_name'),
    )


def _try_provider(name, lookup, queries):
    for query in queries:
        try:
            result = lookup(query)
        except (requests.RequestException, ValueError, KeyError, TypeError,
                IndexError, AttributeError) as e:
            logger.warning('%s lookup failed for %r: %s', name, query, e)
            continue
        if result is not None:
            logger.info('%s found coordinates for %r', name, query)
            return result
        logger.debug('%s had no match for %r', name, query)
    return None


def geocode(address, postal_code, city):
    """
    Coordinates for an address.

    Returns:
        GeocodeResult: always; ``source`` tells which step produced it
    """
    result = _try_provider(SOURCE_KARTVERKET, _from_kartverket,
                           _kartverket_queries(address, postal_code, city))
    if result:
        return result

    logger.info('Kartverket found nothing, trying OpenStreetMap')
    result = _try_provider(SOURCE_NOMINATIM, _from_nominatim,
                           _nominatim_queries(address, postal_code, city))
    if result:
        return result

    coords = lookup_postal_code(postal_code)
    if coords:
        logger.warning('Using postal code table for %s', postal_code)
        return GeocodeResult(
            lat=coords['lat'],
            lng=coords['lng'],
            source=SOURCE_POSTAL_CODE,
            warning='Approximate location based on postal code',
        )

    logger.warning('No coordinates for %s %s, defaulting to Oslo centre', postal_code, city)
    return GeocodeResult(
        lat=OSLO_CENTER['lat'],
        lng=OSLO_CENTER['lng'],
        source=SOURCE_DEFAULT,
        warning='Address not found. Showing Oslo centre',
    )
