# app.py - json api for products, users, orders and the work history log
# run this file starting the server: python app.py

import os

from flask import Flask, jsonify, request, current_app
from flask_login import LoginManager, login_user

from catalog import seed_catalog
from errors import ShopError, StorageError, ValidationError
from models import db, User, ShippingInfo
from services import ProductService, UserService, OrderService, HistoryService

login_manager = LoginManager()

# what the client sees when the database fails, per endpoint
STORAGE_MESSAGES = {
    'get_products': 'Failed to fetch products',
    'get_product': 'Failed to fetch product',
    'get_categories': 'Failed to fetch categories',
    'register_user': 'Failed to register user',
    'login': 'Failed to log in',
    'create_order': 'Failed to create order',
    'get_orders': 'Failed to fetch orders',
    'get_history': 'Failed to fetch history data',
    'create_history': 'Failed to create history entry',
}


def _database_url():
    url = os.environ.get('DATABASE_URL', 'sqlite:///shop.db')
    # heroku/render style urls use the old scheme name
    if url.startswith('postgres://'):
        url = 'postgresql://' + url[len('postgres://'):]
    return url


def create_app(test_config=None):
    app = Flask(__name__)
    app.config['SQLALCHEMY_DATABASE_URI'] = _database_url()
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-shop-secret-key')
    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL', 'INFO')
    app.config['SEED_CATALOG'] = True
    app.json.sort_keys = False
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config['LOG_LEVEL'])

    db.init_app(app)
    login_manager.init_app(app)

    app.extensions['shop.services'] = {
        'products': ProductService(),
        'users': UserService(),
        'orders': OrderService(),
        'history': HistoryService(),
    }

    register_error_handlers(app)
    register_routes(app)

    # setup database and starter catalog
    with app.app_context():
        db.create_all()
        if app.config['SEED_CATALOG']:
            added = seed_catalog()
            if added:
                app.logger.info('Seeded product catalog with %d products', added)

    return app


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


def service(name):
    return current_app.extensions['shop.services'][name]


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Invalid JSON format')
    return data


def text_field(data, key):
    value = data.get(key)
    return value if isinstance(value, str) else None


def register_error_handlers(app):

    @app.errorhandler(ShopError)
    def handle_shop_error(error):
        if isinstance(error, StorageError):
            # keep the details in the log, the client gets a generic message
            app.logger.error('Storage error on %s %s: %s', request.method, request.path, error.message,
                             exc_info=error)
            message = STORAGE_MESSAGES.get(request.endpoint, 'Internal server error')
        else:
            app.logger.info('%s on %s %s: %s', type(error).__name__, request.method, request.path, error.message)
            message = error.message
        return jsonify(error=message), error.status_code


def register_routes(app):

    @app.route('/api/hello')
    def hello():
        return 'hello world from Flask!', 200, {'Content-Type': 'text/plain; charset=utf-8'}

    # product catalog
    @app.route('/api/products')
    def get_products():
        products = service('products').get_all_products(
            category=request.args.get('category', ''),
            search=request.args.get('search', ''),
        )
        return jsonify([p.to_dict() for p in products])

    @app.route('/api/products/<product_id>')
    def get_product(product_id):
        product = service('products').get_product_by_id(product_id)
        return jsonify(product.to_dict())

    @app.route('/api/categories')
    def get_categories():
        return jsonify(service('products').get_categories())

    # users
    @app.route('/api/users/register', methods=['POST'])
    def register_user():
        data = json_body()
        user = service('users').register(
            name=text_field(data, 'name'),
            address=text_field(data, 'address'),
            phone_number=text_field(data, 'phoneNumber'),
            email=text_field(data, 'email'),
            password=text_field(data, 'password'),
        )
        app.logger.info('Registered user %d', user.id)
        return jsonify(user.to_dict()), 201

    @app.route('/api/users/login', methods=['POST'])
    def login():
        data = json_body()
        user = service('users').login(text_field(data, 'email'), text_field(data, 'password'))
        login_user(user)
        return jsonify(user.to_dict())

    # orders
    @app.route('/api/orders', methods=['POST'])
    def create_order():
        data = json_body()
        items = data.get('items') or []
        if not isinstance(items, list):
            raise ValidationError('items must be a list')
        shipping = data.get('shippingInfo') or {}
        if not isinstance(shipping, dict):
            raise ValidationError('shipping name and address are required')
        user_id = data.get('userId')
        if user_id is not None and (isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0):
            raise ValidationError('userId must be a positive integer')

        # totalAmount from the body is deliberately not read
        order = service('orders').create_order(
            items,
            ShippingInfo(
                text_field(shipping, 'name'),
                text_field(shipping, 'address'),
                text_field(shipping, 'phoneNumber'),
            ),
            user_id=user_id,
        )
        app.logger.info('New order created: id=%d, total=%.2f, items=%d',
                        order.id, order.total_amount, len(order.items))
        return jsonify(order.to_dict()), 201

    @app.route('/api/orders')
    def get_orders():
        return jsonify([o.to_dict() for o in service('orders').get_all_orders()])

    # work history
    @app.route('/api/history')
    def get_history():
        return jsonify([e.to_dict() for e in service('history').list_all()])

    @app.route('/api/history', methods=['POST'])
    def create_history():
        data = json_body()
        entry = service('history').append(
            text_field(data, 'description'),
            data.get('effortHours'),
            text_field(data, 'claudePrompt'),
        )
        return jsonify(entry.to_dict()), 201


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    create_app().run(host='0.0.0.0', port=port)
