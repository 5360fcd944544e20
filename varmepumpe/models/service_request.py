"""Service request and installer contact models"""
from varmepumpe import db
from .base import BaseModel, TimestampMixin, utcnow


class ServiceRequest(BaseModel, TimestampMixin):
    """
    Anonymous customer request for heat-pump service.

    Routed to installers by municipality/county.
    """
    __tablename__ = 'service_requests'

    full_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50), nullable=False)
    address = db.Column(db.Text, nullable=False)
    postal_code = db.Column(db.String(4), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    county = db.Column(db.String(100), nullable=False, index=True)
    municipality = db.Column(db.String(100), nullable=False, index=True)

    heat_pump_brand = db.Column(db.String(100))
    heat_pump_model = db.Column(db.String(100))
    service_type = db.Column(db.String(100))
    description = db.Column(db.Text)
    preferred_contact_time = db.Column(db.String(100))

    status = db.Column(db.String(20), nullable=False, default='open', index=True)  # open, contacted, closed

    contacts = db.relationship('ServiceRequestContact', back_populates='service_request',
                               cascade='all, delete-orphan', lazy='dynamic')

    def __repr__(self):
        return f'<ServiceRequest {self.id} {self.municipality} ({self.status})>'


class ServiceRequestContact(BaseModel):
    """An installer's expressed interest in a service request (append-only)"""
    __tablename__ = 'service_request_contacts'

    service_request_id = db.Column(db.Integer, db.ForeignKey('service_requests.id', ondelete='CASCADE'),
                                   nullable=False, index=True)
    installer_id = db.Column(db.Integer, db.ForeignKey('installers.id', ondelete='CASCADE'),
                             nullable=False, index=True)
    contacted_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    status = db.Column(db.String(20), nullable=False, default='interested')
    notes = db.Column(db.Text)
    quote_amount = db.Column(db.Numeric(10, 2))

    service_request = db.relationship('ServiceRequest', back_populates='contacts')
    installer = db.relationship('Installer', back_populates='request_contacts')

    def to_dict(self):
        data = super().to_dict()
        data['company_name'] = self.installer.company_name if self.installer else None
        return data
