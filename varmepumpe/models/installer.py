"""Installer model"""
from varmepumpe import db
from .base import BaseModel, TimestampMixin


class Installer(BaseModel, TimestampMixin):
    """
    Heat-pump installer company, one per installer user.

    Only installers that are both approved and active are offered to
    customers.
    """
    __tablename__ = 'installers'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'),
                        nullable=False, unique=True)

    company_name = db.Column(db.String(255), unique=True, nullable=False)
    org_number = db.Column(db.String(9), unique=True, nullable=False)
    contact_person = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), nullable=False)

    # Primary registered location
    address = db.Column(db.Text)
    postal_code = db.Column(db.String(4))
    city = db.Column(db.String(100))
    county = db.Column(db.String(100), index=True)
    municipality = db.Column(db.String(100), index=True)
    website = db.Column(db.Text)

    certified = db.Column(db.Boolean, nullable=False, default=False)
    approved = db.Column(db.Boolean, nullable=False, default=False)
    active = db.Column(db.Boolean, nullable=False, default=True)
    rating = db.Column(db.Numeric(3, 2), nullable=False, default=0)
    total_services = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.Index('idx_installers_visible', 'approved', 'active'),
    )

    # Relationships
    user = db.relationship('User', back_populates='installer')
    service_areas = db.relationship('ServiceArea', back_populates='installer',
                                    cascade='all, delete-orphan', lazy='dynamic')
    request_contacts = db.relationship('ServiceRequestContact', back_populates='installer',
                                       cascade='all, delete-orphan', lazy='dynamic')
    customer_contacts = db.relationship('CustomerInstallerContact', back_populates='installer',
                                        cascade='all, delete-orphan', lazy='dynamic')

    def __repr__(self):
        return f'<Installer {self.company_name}>'

    @property
    def is_visible(self):
        """Approved and active, i.e. eligible for matching"""
        return bool(self.approved and self.active)

    @property
    def status(self):
        if not self.approved:
            return 'pending'
        return 'active' if self.active else 'deactivated'

    def to_dict(self, include_username=False):
        data = super().to_dict()
        data['status'] = self.status
        if include_username:
            data['username'] = self.user.username if self.user else None
        return data
