# repositories.py - all database access goes through these classes
# services never touch db.session directly

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from errors import ConflictError, StorageError
from models import db, Product, User, Order, HistoryEntry

log = logging.getLogger(__name__)


class BaseRepository:
    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        # resolved lazily so a repository can be built before the app context exists
        return self._session if self._session is not None else db.session

    def _fail(self, message, exc):
        self.session.rollback()
        log.warning('%s, transaction rolled back: %s', message, exc)
        return StorageError(message)


class ProductRepository(BaseRepository):

    def get_all(self, category=None, search=None):
        query = db.select(Product)
        if category and category != 'all':
            query = query.where(Product.category == category)
        if search:
            # icontains escapes % and _ typed by the user
            query = query.where(or_(
                Product.name.icontains(search, autoescape=True),
                Product.category.icontains(search, autoescape=True),
            ))
        query = query.order_by(Product.id)
        try:
            return list(self.session.scalars(query))
        except SQLAlchemyError as e:
            raise self._fail('failed to fetch products', e) from e

    def get_by_id(self, product_id):
        try:
            return self.session.get(Product, product_id)
        except SQLAlchemyError as e:
            raise self._fail('failed to fetch product', e) from e

    def get_categories(self):
        query = db.select(Product.category).distinct().order_by(Product.category)
        try:
            return list(self.session.scalars(query))
        except SQLAlchemyError as e:
            raise self._fail('failed to fetch categories', e) from e

    def count(self):
        return self.session.scalar(db.select(db.func.count(Product.id)))

    def add_all(self, products):
        try:
            self.session.add_all(products)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail('failed to seed products', e) from e


class UserRepository(BaseRepository):

    def create(self, user):
        try:
            self.session.add(user)
            self.session.commit()
        except IntegrityError as e:
            # unique index on email, hit when two registrations race
            self.session.rollback()
            raise ConflictError('email is already registered') from e
        except SQLAlchemyError as e:
            raise self._fail('failed to create user', e) from e
        return user

    def find_by_email(self, email):
        try:
            return self.session.scalars(db.select(User).filter_by(email=email)).first()
        except SQLAlchemyError as e:
            raise self._fail('failed to look up user', e) from e


class OrderRepository(BaseRepository):

    def create(self, order, items):
        """Write the order header and every item in one transaction.

        The unit of work inserts the header before its items so they pick up
        its id. If any insert fails the whole unit is rolled back and nothing
        is visible to other readers.
        """
        for line_number, item in enumerate(items, start=1):
            item.line_number = line_number
            order.items.append(item)
        try:
            self.session.add(order)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail('failed to create order', e) from e
        return order

    def get_all(self):
        # items are loaded in one extra query and grouped per order by the relationship
        query = db.select(Order).order_by(Order.ordered_at.desc(), Order.id.desc())
        try:
            return list(self.session.scalars(query))
        except SQLAlchemyError as e:
            raise self._fail('failed to fetch orders', e) from e

    def count(self):
        return self.session.scalar(db.select(db.func.count(Order.id)))


class HistoryRepository(BaseRepository):

    def get_all(self):
        query = db.select(HistoryEntry).order_by(HistoryEntry.timestamp.desc(), HistoryEntry.id.desc())
        try:
            return list(self.session.scalars(query))
        except SQLAlchemyError as e:
            raise self._fail('failed to fetch history', e) from e

    def create(self, entry):
        try:
            self.session.add(entry)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail('failed to create history entry', e) from e
        return entry
