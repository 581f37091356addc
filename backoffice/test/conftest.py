"""
Pytest configuration and fixtures

Every test gets a fresh application bound to an in-memory SQLite database.
"""
import pytest

from backoffice import create_app
from backoffice import db as _db
from backoffice.build import build_tables
from backoffice.data.core.store import Store

TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret-key',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'RATELIMIT_ENABLED': False,
    'API_KEY': None,
}


def make_app(**overrides):
    return create_app(dict(TEST_CONFIG, **overrides))


@pytest.fixture(scope='function')
def app():
    """Create Flask application for testing with empty tables"""
    app = make_app()

    with app.app_context():
        build_tables()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def store(app):
    return Store()


@pytest.fixture(scope='function')
def stocked(store):
    """Catalog with two raw materials and one finished good"""
    from backoffice.buisness.inventory import ProductCatalog

    catalog = ProductCatalog(store)
    catalog.add_product({'product_code': 'RM001', 'name': 'Steel Sheet', 'price': 4.0, 'quantity': 100})
    catalog.add_product({'product_code': 'RM002', 'name': 'Bolt', 'price': 0.5, 'quantity': 30})
    catalog.add_product({'product_code': 'FG001', 'name': 'Bracket', 'price': 10.0, 'quantity': 2})
    return catalog


@pytest.fixture(scope='function')
def qty(store):
    """Current on-hand quantity read from the database (None if the product is unknown)"""
    def _qty(product_code):
        product = store.products.find_by_key(product_code, refresh=True)
        return None if product is None else product.quantity
    return _qty


@pytest.fixture(scope='function')
def keyed_client():
    """Test client for an app that requires X-API-Key: s3cret"""
    app = make_app(API_KEY='s3cret')
    with app.app_context():
        build_tables()
        yield app.test_client()
        _db.session.remove()


@pytest.fixture(scope='function')
def file_app(tmp_path):
    """App on a file-backed SQLite database that several threads can share, with RM001 at 100"""
    from backoffice.buisness.inventory import ProductCatalog

    app = make_app(SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'backoffice.db'}")
    with app.app_context():
        build_tables()
        ProductCatalog().add_product({'product_code': 'RM001', 'name': 'Steel Sheet', 'quantity': 100})
    yield app
    with app.app_context():
        _db.session.remove()
        _db.engine.dispose()
