"""Customer, heat pump and customer contact models"""
from varmepumpe import db
from .base import BaseModel, TimestampMixin, utcnow


class Customer(BaseModel, TimestampMixin):
    """Optional logged-in customer profile, independent of service requests"""
    __tablename__ = 'customers'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), index=True)

    full_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), nullable=False)
    address = db.Column(db.Text, nullable=False)
    postal_code = db.Column(db.String(4), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    county = db.Column(db.String(100), nullable=False)
    municipality = db.Column(db.String(100), nullable=False, index=True)

    # Free for everyone for now; counted towards the revenue estimate
    subscription_active = db.Column(db.Boolean, nullable=False, default=True)

    user = db.relationship('User', back_populates='customer')
    heat_pumps = db.relationship('HeatPump', back_populates='customer',
                                 cascade='all, delete-orphan', lazy='dynamic')
    contacts = db.relationship('CustomerInstallerContact', back_populates='customer',
                               cascade='all, delete-orphan', lazy='dynamic')

    def __repr__(self):
        return f'<Customer {self.full_name}>'


class HeatPump(BaseModel, TimestampMixin):
    __tablename__ = 'heat_pumps'

    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id', ondelete='CASCADE'),
                            nullable=False, index=True)
    brand = db.Column(db.String(100), nullable=False)
    model = db.Column(db.String(100), nullable=False)
    last_service_date = db.Column(db.Date)
    next_service_due = db.Column(db.Date)

    customer = db.relationship('Customer', back_populates='heat_pumps')


class CustomerInstallerContact(BaseModel):
    """Contact between a logged-in customer and an installer"""
    __tablename__ = 'customer_installer_contacts'

    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id', ondelete='CASCADE'),
                            nullable=False, index=True)
    installer_id = db.Column(db.Integer, db.ForeignKey('installers.id', ondelete='CASCADE'),
                             nullable=False, index=True)
    contacted_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    status = db.Column(db.String(20), nullable=False, default='pending')  # pending, accepted, completed
    notes = db.Column(db.Text)

    customer = db.relationship('Customer', back_populates='contacts')
    installer = db.relationship('Installer', back_populates='customer_contacts')
