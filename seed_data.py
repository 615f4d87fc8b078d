#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sqlite3
from pathlib import Path

try:
    import pandas as pd
except ModuleNotFoundError as exc:
    raise SystemExit("Missing dependency. Install with: pip install pandas") from exc

from settings import load_settings

logger = logging.getLogger(__name__)

SAMPLE_CUSTOMERS = [
    {"customer_id": 1, "full_name": "Alice Johnson", "email": "alice@example.com", "status": "active",
     "total_spent": 1250.45, "created_at": "2023-01-15 10:00:00"},
    {"customer_id": 2, "full_name": "Brian Chen", "email": "brian@example.com", "status": "active",
     "total_spent": 980.0, "created_at": "2023-05-24 09:14:00"},
    {"customer_id": 3, "full_name": "Carmen Diaz", "email": "carmen@example.com", "status": "inactive",
     "total_spent": 640.9, "created_at": "2022-11-05 16:33:00"},
]

SAMPLE_ORDERS = [
    {"order_id": 1, "customer_id": 1, "order_date": "2024-01-05", "status": "completed", "total_amount": 450.25},
    {"order_id": 2, "customer_id": 1, "order_date": "2024-02-18", "status": "completed", "total_amount": 800.2},
    {"order_id": 3, "customer_id": 2, "order_date": "2024-03-02", "status": "pending", "total_amount": 300.5},
    {"order_id": 4, "customer_id": 3, "order_date": "2023-12-21", "status": "cancelled", "total_amount": 120.0},
]

SAMPLE_PRODUCTS = [
    {"product_id": 1, "product_name": "Aurora Hoodie", "category": "Apparel", "stock_quantity": 42,
     "status": "active", "last_restocked": "2024-03-10"},
    {"product_id": 2, "product_name": "Eclipse Backpack", "category": "Gear", "stock_quantity": 0,
     "status": "out_of_stock", "last_restocked": "2023-11-05"},
    {"product_id": 3, "product_name": "Lumen Watch", "category": "Accessories", "stock_quantity": 17,
     "status": "active", "last_restocked": "2024-04-28"},
]


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Create and seed the SQLite playground database.")
    p.add_argument("--db-path", default=None, help="Defaults to PLAYGROUND_DB_PATH or data/playground.db.")
    p.add_argument("--reset", action="store_true", help="Drop the demo tables before seeding.")
    return p.parse_args()


def drop_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        DROP TABLE IF EXISTS orders;
        DROP TABLE IF EXISTS products;
        DROP TABLE IF EXISTS customers;
        """
    )


def create_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS customers (
            customer_id INTEGER PRIMARY KEY,
            full_name TEXT NOT NULL,
            email TEXT UNIQUE NOT NULL,
            status TEXT DEFAULT 'active',
            total_spent NUMERIC DEFAULT 0,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS orders (
            order_id INTEGER PRIMARY KEY,
            customer_id INTEGER NOT NULL,
            order_date TEXT DEFAULT CURRENT_TIMESTAMP,
            status TEXT DEFAULT 'pending',
            total_amount NUMERIC DEFAULT 0,
            FOREIGN KEY (customer_id) REFERENCES customers(customer_id)
        );

        CREATE TABLE IF NOT EXISTS products (
            product_id INTEGER PRIMARY KEY,
            product_name TEXT NOT NULL,
            category TEXT,
            stock_quantity INTEGER DEFAULT 0,
            status TEXT DEFAULT 'active',
            last_restocked TEXT DEFAULT CURRENT_TIMESTAMP
        );
        """
    )


def seed_sample_data(conn: sqlite3.Connection) -> bool:
    """Insert the sample rows unless ``customers`` already has data."""
    count = conn.execute("SELECT COUNT(*) FROM customers").fetchone()[0]
    if count:
        return False

    pd.DataFrame(SAMPLE_CUSTOMERS).to_sql("customers", conn, if_exists="append", index=False)
    pd.DataFrame(SAMPLE_ORDERS).to_sql("orders", conn, if_exists="append", index=False)
    pd.DataFrame(SAMPLE_PRODUCTS).to_sql("products", conn, if_exists="append", index=False)
    conn.commit()
    return True


def main() -> None:
    args = parse_args()
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    db = Path(args.db_path or settings.db_path)
    db.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db))
    try:
        if args.reset:
            drop_schema(conn)
        create_schema(conn)
        seeded = seed_sample_data(conn)
    finally:
        conn.close()

    print(f"Seed complete: {db}" if seeded else f"Sample data already present: {db}")
    print(f"Rows -> customers={len(SAMPLE_CUSTOMERS)}, orders={len(SAMPLE_ORDERS)}, products={len(SAMPLE_PRODUCTS)}")


if __name__ == "__main__":
    main()
