"""
Installer matching for a municipality or county.

An installer matches when one of its service areas, or its own registered
location, names the place. Only approved and active installers are
returned. Place names are compared exactly as stored.
"""
import logging
from dataclasses import dataclass, field

from varmepumpe import db
from varmepumpe.models import Installer, ServiceArea

logger = logging.getLogger(__name__)

SCOPES = ('municipality', 'county')


@dataclass
class InstallerMatch:
    """A matched installer plus the counties seen while matching it"""
    installer: Installer
    counties: list = field(default_factory=list)

    def add_county(self, county):
        if county and county not in self.counties:
            self.counties.append(county)

    @property
    def rating(self):
        return float(self.installer.rating or 0)

    def to_dict(self):
        data = self.installer.to_dict()
        data['counties'] = list(self.counties)
        return data


def find_installers(kind, value):
    """
    Installers covering a municipality or county, best rated first.

    Args:
        kind (str): 'municipality' or 'county'
        value (str): place name, matched exactly

    Returns:
        list[InstallerMatch]: empty when nobody covers the place
    """
    if kind not in SCOPES:
        raise ValueError(f'Unknown match scope: {kind}')

    visible = (Installer.approved.is_(True), Installer.active.is_(True))

    area_rows = (
        db.session.query(Installer, ServiceArea.county)
        .join(ServiceArea, ServiceArea.installer_id == Installer.id)
        .filter(getattr(ServiceArea, kind) == value, *visible)
        .order_by(Installer.id, ServiceArea.id)
        .all()
    )
    primary = (
        Installer.query
        .filter(getattr(Installer, kind) == value, *visible)
        .order_by(Installer.id)
        .all()
    )

    matches = {}
    for installer, county in area_rows:
        matches.setdefault(installer.id, InstallerMatch(installer)).add_county(county)
    for installer in primary:
        matches.setdefault(installer.id, InstallerMatch(installer)).add_county(installer.county)

    # sorted() is stable, so equal ratings keep discovery order
    result = sorted(matches.values(), key=lambda match: match.rating, reverse=True)
    logger.debug('Matched %d installer(s) for %s=%r', len(result), kind, value)
    return result


def installers_for_municipality(municipality):
    return find_installers('municipality', municipality)


def installers_for_county(county):
    return find_installers('county', county)
