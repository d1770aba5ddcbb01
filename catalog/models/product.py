"""
Product Model
"""

from datetime import datetime, timezone

from catalog.extensions import db


def utcnow():
    """Naive UTC timestamp, as stored in DATETIME columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Product(db.Model):
    """A catalog entry. ``price`` is free text and never parsed."""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.String(100), nullable=False)
    icon = db.Column(db.String(10))
    # Path under /uploads, owned by the media store
    image = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow,
                           nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'price': self.price,
            'icon': self.icon,
            'image': self.image,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Product {self.id} {self.name}>'
