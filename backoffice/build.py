#!/usr/bin/env python3
"""
Database build for the back-office system
Creates tables and sequence counters, optionally inserts demo data
"""

import json
from pathlib import Path

from backoffice import db
from backoffice.data.core.sequences import CustomerIDManager, SupplierIDManager
from backoffice.logger import get_logger

logger = get_logger("backoffice.build")

DEMO_DATA_FILE = Path(__file__).parent / 'data' / 'build_data_demo.json'


def build_tables():
    """Create all model tables and the id sequence counters (idempotent)."""
    db.create_all()
    for id_manager in (CustomerIDManager, SupplierIDManager):
        id_manager.create_sequence_if_not_exists(db.session)
    logger.info("All database tables created")


def insert_demo_data(data_file=DEMO_DATA_FILE):
    """
    Insert the demo catalog and parties, through the managers, when the
    product table is empty.

    Returns:
        bool: True if data was inserted
    """
    from backoffice.buisness.inventory import ProductCatalog
    from backoffice.buisness.parties import CustomerDirectory, SupplierDirectory
    from backoffice.data.core.store import Store

    store = Store()
    if store.products.list():
        logger.info("Products already present, skipping demo data")
        return False

    logger.info(f"Loading demo data from {data_file.name}...")
    with open(data_file, 'r') as f:
        demo_data = json.load(f)

    catalog = ProductCatalog(store)
    customers = CustomerDirectory(store)
    suppliers = SupplierDirectory(store)

    with store.transaction():
        for product in demo_data.get('products', []):
            catalog.add_product(product)
        for customer in demo_data.get('customers', []):
            customers.create(customer)
        for supplier in demo_data.get('suppliers', []):
            suppliers.create(supplier)

    logger.info(
        f"Demo data inserted: {len(demo_data.get('products', []))} products, "
        f"{len(demo_data.get('customers', []))} customers, {len(demo_data.get('suppliers', []))} suppliers"
    )
    return True


def build_database(app=None, seed=False):
    """
    Build orchestrator

    Args:
        app: Flask app to build against (created from the environment if omitted)
        seed (bool): Insert demo data into an empty database
    """
    if app is None:
        from backoffice import create_app
        app = create_app()

    with app.app_context():
        logger.info(f"Starting database build (seed={seed})")
        build_tables()
        if seed:
            insert_demo_data()
        logger.info("Database build completed successfully")


if __name__ == '__main__':
    import sys

    build_database(seed='--seed' in sys.argv[1:])
