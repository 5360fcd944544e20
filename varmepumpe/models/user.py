"""User model"""
from varmepumpe import db, login_manager
from .base import BaseModel, TimestampMixin, utcnow
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash


class User(BaseModel, TimestampMixin, UserMixin):
    """
    User model - customers, installers and admins
    Includes Flask-Login integration
    """
    __tablename__ = 'users'

    username = db.Column(db.String(100), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))

    role = db.Column(db.String(20), nullable=False, default='customer')

    # Password reset
    reset_token = db.Column(db.String(128), index=True)
    reset_token_expiry = db.Column(db.DateTime)
    password_changed_at = db.Column(db.DateTime)

    installer = db.relationship('Installer', back_populates='user', uselist=False)
    customer = db.relationship('Customer', back_populates='user', uselist=False)

    def __repr__(self):
        return f'<User {self.username} ({self.role})>'

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = generate_password_hash(password)
        self.password_changed_at = utcnow()

    def check_password(self, password):
        """Verify password against hash"""
        return check_password_hash(self.password_hash, password)

    @property
    def full_name(self):
        return ' '.join(part for part in (self.first_name, self.last_name) if part)

    def is_admin(self):
        return self.role == 'admin'

    def is_installer(self):
        return self.role == 'installer'

    def is_customer(self):
        return self.role == 'customer'

    def summary(self):
        """The small user payload returned by login/register/current-user"""
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
        }

    def to_dict(self):
        data = super().to_dict(exclude=['password_hash', 'reset_token', 'reset_token_expiry'])
        data['full_name'] = self.full_name
        return data


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))
