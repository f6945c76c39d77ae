# this file defines the database structure for the shop backend
# it uses 5 tables: products, users, orders, order items and the work history log

from collections import namedtuple
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

db = SQLAlchemy()

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


def _utcnow():
    return datetime.now(timezone.utc)


def _money(value):
    return float(value) if value is not None else 0.0


# shipping details are copied onto the order row at checkout
ShippingInfo = namedtuple('ShippingInfo', ['name', 'address', 'phone_number'])


# table 1: products - seeded reference data, read only at runtime
class Product(db.Model):
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    description = db.Column(db.Text, default='')
    image_url = db.Column(db.String(500), default='')
    category = db.Column(db.String(100), nullable=False, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': _money(self.price),
            'description': self.description or '',
            'imageUrl': self.image_url or '',
            'category': self.category,
        }

    def __repr__(self):
        return f'<Product {self.name}>'


# table 2: users - passwords are only ever kept as a salted hash
class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    address = db.Column(db.String(500), default='')
    phone_number = db.Column(db.String(50), default='')
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        # never expose the hash
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address or '',
            'phoneNumber': self.phone_number or '',
            'email': self.email,
        }

    def __repr__(self):
        return f'<User {self.email}>'


# table 3: orders - header row, total is always computed on the server
class Order(db.Model):
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=True)  # null for guest checkout
    total_amount = db.Column(db.Numeric(12, 2), nullable=False)
    ordered_at = db.Column(db.DateTime, nullable=False, default=_utcnow, index=True)
    shipping_name = db.Column(db.String(200), nullable=False)
    shipping_address = db.Column(db.String(500), nullable=False)
    shipping_phone_number = db.Column(db.String(50), default='')

    # items come back grouped by order and in the order they were written
    items = db.relationship(
        'OrderItem',
        backref='order',
        order_by='OrderItem.line_number',
        lazy='selectin',
        cascade='all, delete-orphan',
    )

    @property
    def shipping_info(self):
        return ShippingInfo(self.shipping_name, self.shipping_address, self.shipping_phone_number)

    @property
    def timestamp(self):
        return self.ordered_at.strftime(TIMESTAMP_FORMAT) if self.ordered_at else None

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'timestamp': self.timestamp,
            'items': [item.to_dict() for item in self.items],
            'totalAmount': _money(self.total_amount),
            'shippingInfo': {
                'name': self.shipping_name,
                'address': self.shipping_address,
                'phoneNumber': self.shipping_phone_number or '',
            },
        }

    def __repr__(self):
        return f'<Order {self.id}>'


# table 4: order items - snapshot of name and price at time of order
class OrderItem(db.Model):
    __tablename__ = 'order_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False, index=True)
    line_number = db.Column(db.Integer, nullable=False)  # 1-based position inside the order
    product_id = db.Column(db.Integer, nullable=False)   # not checked against products
    product_name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)

    __table_args__ = (db.UniqueConstraint('order_id', 'line_number'),)

    @property
    def subtotal(self):
        return self.price * self.quantity

    def to_dict(self):
        return {
            'id': self.line_number,
            'orderId': self.order_id,
            'productId': self.product_id,
            'name': self.product_name,
            'price': _money(self.price),
            'quantity': self.quantity,
            'subtotal': _money(self.subtotal),
        }


# table 5: update history - append only work log
class HistoryEntry(db.Model):
    __tablename__ = 'update_history'

    id = db.Column(db.Integer, primary_key=True)
    timestamp = db.Column(db.DateTime, nullable=False, default=_utcnow, index=True)
    description = db.Column(db.Text, nullable=False)
    effort_hours = db.Column(db.Numeric(5, 2), nullable=False)
    claude_prompt = db.Column(db.Text, nullable=False, default='')

    def to_dict(self):
        return {
            'id': self.id,
            'timestamp': self.timestamp.strftime(TIMESTAMP_FORMAT) if self.timestamp else None,
            'description': self.description,
            'effortHours': _money(self.effort_hours),
            'claudePrompt': self.claude_prompt or '',
        }
