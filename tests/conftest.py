import pytest

from app import create_app
from models import db


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SECRET_KEY': 'test',
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def order_payload():
    return {
        'items': [{'productId': 1, 'name': 'X', 'price': 29.99, 'quantity': 2}],
        'totalAmount': 999.99,
        'shippingInfo': {'name': 'John Doe', 'address': '456 Order St', 'phoneNumber': '987-654-3210'},
    }
