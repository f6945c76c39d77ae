# services.py - business rules sit here, between the routes and the repositories
# input is validated before any storage access

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from errors import AuthError, ConflictError, InvalidArgument, NotFoundError, ValidationError
from models import User, Order, OrderItem, HistoryEntry
from repositories import ProductRepository, UserRepository, OrderRepository, HistoryRepository


CENT = Decimal('0.01')
MAX_EFFORT_HOURS = Decimal('1000')  # effort_hours is Numeric(5, 2)


def _blank(value):
    return value is None or not str(value).strip()


def to_decimal(value, message):
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        # via str so 29.99 stays 29.99 and not its binary approximation
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(message)
    if not number.is_finite():
        raise ValidationError(message)
    return number


class ProductService:
    def __init__(self, products=None):
        self.products = products or ProductRepository()

    def get_all_products(self, category=None, search=None):
        return self.products.get_all(category=category, search=search)

    def get_product_by_id(self, raw_id):
        try:
            product_id = int(str(raw_id).strip())
        except (TypeError, ValueError):
            raise InvalidArgument('invalid product ID')
        if product_id <= 0:
            raise InvalidArgument('invalid product ID')

        product = self.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError('product not found')
        return product

    def get_categories(self):
        return self.products.get_categories()


class UserService:
    def __init__(self, users=None):
        self.users = users or UserRepository()

    def register(self, name, address, phone_number, email, password):
        if _blank(name) or _blank(email) or not password:
            raise ValidationError('name, email, and password are required')

        email = email.strip()
        if self.users.find_by_email(email) is not None:
            raise ConflictError('email is already registered')

        user = User(name=name.strip(), address=address or '', phone_number=phone_number or '', email=email)
        user.set_password(password)
        return self.users.create(user)

    def login(self, email, password):
        if _blank(email) or not password:
            raise ValidationError('email and password are required')

        user = self.users.find_by_email(email.strip())
        # same answer for unknown email and wrong password
        if user is None or not user.check_password(password):
            raise AuthError('invalid email or password')
        return user


class OrderService:
    def __init__(self, orders=None):
        self.orders = orders or OrderRepository()

    def create_order(self, items, shipping_info, user_id=None):
        """Validate, price and store an order.

        ``items`` is a list of dicts with productId, name, price and quantity.
        Whatever total the client computed is ignored: every subtotal and the
        order total are worked out here from price and quantity.
        """
        if not items:
            raise ValidationError('order must contain at least one item')
        if shipping_info is None or _blank(shipping_info.name) or _blank(shipping_info.address):
            raise ValidationError('shipping name and address are required')

        order_items = [self._build_item(raw) for raw in items]
        total = sum((item.subtotal for item in order_items), Decimal('0'))

        order = Order(
            user_id=user_id,
            total_amount=total,
            shipping_name=shipping_info.name.strip(),
            shipping_address=shipping_info.address.strip(),
            shipping_phone_number=shipping_info.phone_number or '',
        )
        return self.orders.create(order, order_items)

    def get_all_orders(self):
        return self.orders.get_all()

    def _build_item(self, raw):
        if not isinstance(raw, dict):
            raise ValidationError('each order item must be an object')

        price = to_decimal(raw.get('price'), 'item price must be a number')
        if price < 0:
            raise ValidationError('item price must not be negative')
        # prices are stored to the cent, so subtotals and the total are worked out from that value
        price = price.quantize(CENT, rounding=ROUND_HALF_UP)

        quantity = raw.get('quantity')
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError('item quantity must be a positive integer')

        product_id = raw.get('productId')
        if isinstance(product_id, bool) or not isinstance(product_id, int):
            raise ValidationError('item productId must be an integer')

        return OrderItem(
            product_id=product_id,
            product_name=str(raw.get('name') or ''),
            price=price,
            quantity=quantity,
        )


class HistoryService:
    def __init__(self, history=None):
        self.history = history or HistoryRepository()

    def list_all(self):
        return self.history.get_all()

    def append(self, description, effort_hours, note):
        if _blank(description):
            raise ValidationError('description is required')
        hours = to_decimal(effort_hours if effort_hours is not None else 0, 'effort hours must be a number')
        if hours < 0:
            raise ValidationError('effort hours must be between 0 and 999.99')
        hours = hours.quantize(CENT, rounding=ROUND_HALF_UP)
        if hours >= MAX_EFFORT_HOURS:
            raise ValidationError('effort hours must be between 0 and 999.99')

        entry = HistoryEntry(description=description.strip(), effort_hours=hours, claude_prompt=note or '')
        return self.history.create(entry)
