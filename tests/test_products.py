import pytest

from catalog import CATALOG, seed_catalog
from errors import InvalidArgument, NotFoundError
from services import ProductService


def test_catalog_seeded_once(app):
    assert seed_catalog() == 0
    assert len(ProductService().get_all_products()) == len(CATALOG)


def test_list_products_ordered_by_id(client):
    res = client.get('/api/products')
    assert res.status_code == 200
    products = res.get_json()
    ids = [p['id'] for p in products]
    assert ids == sorted(ids)
    assert set(products[0]) == {'id', 'name', 'price', 'description', 'imageUrl', 'category'}


@pytest.mark.parametrize('category', ['', 'all'])
def test_category_sentinels_disable_filter(client, category):
    res = client.get('/api/products', query_string={'category': category})
    assert len(res.get_json()) == len(CATALOG)


def test_filter_by_category(client):
    products = client.get('/api/products?category=Drinks').get_json()
    assert products
    assert all(p['category'] == 'Drinks' for p in products)


def test_search_matches_name_or_category_case_insensitive(app):
    service = ProductService()
    by_name = service.get_all_products(search='COFFEE')
    assert {p.name for p in by_name} == {'Coffee Beans', 'Coffee Cup'}
    by_category = service.get_all_products(search='bakery')
    assert by_category and all(p.category == 'Bakery' for p in by_category)


def test_category_and_search_combine(app):
    products = ProductService().get_all_products(category='Home', search='coffee')
    assert [p.name for p in products] == ['Coffee Cup']


def test_search_wildcards_are_literal(app):
    assert ProductService().get_all_products(search='%') == []
    assert ProductService().get_all_products(search='_') == []


def test_get_product_by_id(client):
    res = client.get('/api/products/3')
    assert res.status_code == 200
    assert res.get_json()['name'] == 'Vine Tomatoes'
    assert res.get_json()['price'] == 3.2


def test_unknown_product_is_404(client):
    res = client.get('/api/products/9999')
    assert res.status_code == 404
    assert res.get_json()['error'] == 'product not found'


@pytest.mark.parametrize('raw_id', ['abc', '0', '-4', '1.5'])
def test_invalid_product_id_is_400(client, raw_id):
    res = client.get(f'/api/products/{raw_id}')
    assert res.status_code == 400
    assert res.get_json()['error'] == 'invalid product ID'


def test_service_errors(app):
    service = ProductService()
    with pytest.raises(InvalidArgument):
        service.get_product_by_id('x1')
    with pytest.raises(NotFoundError):
        service.get_product_by_id(12345)


def test_categories_distinct_and_sorted(client):
    res = client.get('/api/categories')
    assert res.status_code == 200
    categories = res.get_json()
    assert categories == sorted({row[-1] for row in CATALOG})


def test_hello(client):
    res = client.get('/api/hello')
    assert res.status_code == 200
    assert res.mimetype == 'text/plain'
    assert res.get_data(as_text=True) == 'hello world from Flask!'
