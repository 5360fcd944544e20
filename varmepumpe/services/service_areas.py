"""
Installer service areas.

An installer's set never holds the same (county, municipality) pair twice.
"""
import logging

from varmepumpe import db
from varmepumpe.errors import NotFoundError, PermissionDenied
from varmepumpe.models import ServiceArea
from varmepumpe.services import unit_of_work

logger = logging.getLogger(__name__)


def _unique(areas):
    """Drop repeated pairs, keeping the first occurrence's order"""
    seen = set()
    result = []
    for area in areas:
        pair = (area.county, area.municipality)
        if pair not in seen:
            seen.add(pair)
            result.append(pair)
    return result


def list_areas(installer_id):
    return (
        ServiceArea.query
        .filter_by(installer_id=installer_id)
        .order_by(ServiceArea.county, ServiceArea.municipality)
        .all()
    )


def add_areas(installer, areas):
    """
    Add pairs the installer does not cover yet.

    Returns:
        list[ServiceArea]: the rows actually created
    """
    existing = {area.pair for area in installer.service_areas}
    created = []
    with unit_of_work() as session:
        for county, municipality in _unique(areas):
            if (county, municipality) in existing:
                continue
            area = ServiceArea(installer_id=installer.id, county=county, municipality=municipality)
            session.add(area)
            created.append(area)

    logger.info('Installer %s added %d service area(s)', installer.id, len(created))
    return created


def replace_areas(installer, areas):
    """
    Replace the installer's whole set in one transaction.

    Calling it twice with the same input leaves the same set.
    """
    pairs = _unique(areas)
    with unit_of_work() as session:
        ServiceArea.query.filter_by(installer_id=installer.id).delete(synchronize_session=False)
        for county, municipality in pairs:
            session.add(ServiceArea(installer_id=installer.id, county=county, municipality=municipality))

    logger.info('Installer %s now covers %d service area(s)', installer.id, len(pairs))
    return list_areas(installer.id)


def delete_area(installer, area_id):
    area = db.session.get(ServiceArea, area_id)
    if area is None:
        raise NotFoundError('Service area not found')
    if area.installer_id != installer.id:
        raise PermissionDenied('You can only delete your own service areas')

    with unit_of_work() as session:
        session.delete(area)
    logger.info('Installer %s removed service area %s', installer.id, area_id)
