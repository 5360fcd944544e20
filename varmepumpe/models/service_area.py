"""Service area model"""
from varmepumpe import db
from .base import BaseModel


class ServiceArea(BaseModel):
    """
    One (county, municipality) pair an installer covers.

    Pairs are kept unique per installer by the service layer; there is no
    database constraint.
    """
    __tablename__ = 'service_areas'

    installer_id = db.Column(db.Integer, db.ForeignKey('installers.id', ondelete='CASCADE'),
                             nullable=False, index=True)
    county = db.Column(db.String(100), nullable=False, index=True)
    municipality = db.Column(db.String(100), nullable=False, index=True)

    installer = db.relationship('Installer', back_populates='service_areas')

    def __repr__(self):
        return f'<ServiceArea {self.county}/{self.municipality}>'

    @property
    def pair(self):
        return (self.county, self.municipality)
