# catalog.py - starter product catalog, loaded once into an empty products table

from decimal import Decimal

from models import Product
from repositories import ProductRepository

CATALOG = [
    # food
    (1, 'Fresh Avocado', '2.80', 'Creamy, nutrient rich avocado', 'https://cdn.pixabay.com/photo/2016/03/05/19/02/avocado-1238250_1280.jpg', 'Food'),
    (2, 'Organic Bananas', '1.98', 'Naturally grown sweet bananas', 'https://cdn.pixabay.com/photo/2017/06/28/10/14/bananas-2450718_1280.jpg', 'Food'),
    (3, 'Vine Tomatoes', '3.20', 'Juicy fully ripened tomatoes', 'https://cdn.pixabay.com/photo/2016/08/10/16/11/tomatoes-1583288_1280.jpg', 'Food'),
    (4, 'Organic Carrots', '2.50', 'Sweet carrots from organic farms', 'https://cdn.pixabay.com/photo/2016/08/09/10/30/carrots-1579717_1280.jpg', 'Food'),
    # bakery
    (5, 'Croissant', '2.80', 'Flaky all-butter croissant', 'https://cdn.pixabay.com/photo/2014/04/22/02/56/croissant-329136_1280.jpg', 'Bakery'),
    (6, 'Sandwich Loaf', '3.20', 'Soft and fluffy white bread', 'https://cdn.pixabay.com/photo/2017/06/23/23/49/bread-2434370_1280.jpg', 'Bakery'),
    (7, 'Plain Bagel', '2.50', 'Chewy plain bagel', 'https://cdn.pixabay.com/photo/2017/05/07/08/56/blank-2292428_1280.jpg', 'Bakery'),
    # drinks
    (8, 'Coffee Beans', '9.80', 'Aromatic arabica coffee beans', 'https://cdn.pixabay.com/photo/2015/07/02/20/57/coffee-beans-829734_1280.jpg', 'Drinks'),
    (9, 'Green Tea', '6.80', 'High grade Japanese green tea', 'https://cdn.pixabay.com/photo/2015/10/12/15/46/tea-984367_1280.jpg', 'Drinks'),
    (10, 'Orange Juice', '3.80', '100% fresh squeezed orange juice', 'https://cdn.pixabay.com/photo/2017/05/12/08/29/juice-2306330_1280.jpg', 'Drinks'),
    # sweets
    (11, 'Chocolate Cake', '12.80', 'Rich dark chocolate cake', 'https://cdn.pixabay.com/photo/2017/01/11/11/33/cake-1971552_1280.jpg', 'Sweets'),
    (12, 'Macarons', '4.80', 'Colourful French macarons', 'https://cdn.pixabay.com/photo/2017/07/05/15/41/macarons-2474188_1280.jpg', 'Sweets'),
    # home
    (13, 'Coffee Cup', '12.00', 'Elegant white porcelain cup', 'https://cdn.pixabay.com/photo/2016/11/29/12/51/cafe-1869656_1280.jpg', 'Home'),
    (14, 'Aroma Candle', '6.80', 'Relaxing scented candle', 'https://cdn.pixabay.com/photo/2017/02/15/12/12/candles-2069021_1280.jpg', 'Home'),
    (15, 'Wall Clock', '48.00', 'Simple and stylish wall clock', 'https://cdn.pixabay.com/photo/2017/06/08/17/32/clock-2383642_1280.jpg', 'Home'),
    # stationery
    (16, 'Coloured Pencil Set', '12.80', '48 colour pencil set', 'https://cdn.pixabay.com/photo/2015/11/07/11/22/pencils-1030092_1280.jpg', 'Stationery'),
    (17, 'Fountain Pen', '38.00', 'Smooth writing fountain pen', 'https://cdn.pixabay.com/photo/2016/03/26/22/22/fountain-pen-1281576_1280.jpg', 'Stationery'),
    # fashion
    (18, 'Cotton T-Shirt', '19.80', 'Comfortable 100% cotton tee', 'https://cdn.pixabay.com/photo/2016/12/06/09/31/blank-1886008_1280.jpg', 'Fashion'),
    (19, 'Sneakers', '78.00', 'Easy walking casual sneakers', 'https://cdn.pixabay.com/photo/2016/06/03/17/35/shoes-1433925_1280.jpg', 'Fashion'),
    (20, 'Tote Bag', '48.00', 'Practical and stylish tote bag', 'https://cdn.pixabay.com/photo/2017/08/01/11/48/woman-2563491_1280.jpg', 'Fashion'),
]


def seed_catalog(repository=None):
    """Insert the starter catalog if the products table is empty. Returns rows added."""
    repository = repository or ProductRepository()
    if repository.count():
        return 0
    products = [
        Product(id=pid, name=name, price=Decimal(price), description=desc, image_url=image, category=category)
        for pid, name, price, desc, image, category in CATALOG
    ]
    repository.add_all(products)
    return len(products)
