"""Postal code reference model"""
from varmepumpe import db
from .base import BaseModel


class PostalCode(BaseModel):
    """Norwegian postal code with its post place, municipality and county"""
    __tablename__ = 'postal_codes'

    postal_code = db.Column(db.String(4), unique=True, nullable=False, index=True)
    post_place = db.Column(db.String(100), nullable=False)
    municipality = db.Column(db.String(100), nullable=False)
    county = db.Column(db.String(100), nullable=False)

    def __repr__(self):
        return f'<PostalCode {self.postal_code} {self.post_place}>'
