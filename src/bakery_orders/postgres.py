"""
PostgreSQL implementation of the identity, catalog and order stores.

Orders own their customer (stored inline on the order row), items and
history (child tables, ordered by position, deleted with the order).
Products, pickup locations and users are referenced by id.

Nothing is committed until transaction() exits cleanly; any exception
inside it rolls the whole seeding run back.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2.extensions import connection as PgConnection

from .models import Order, PickupLocation, Product, User

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    email VARCHAR(255) NOT NULL UNIQUE,
    first_name VARCHAR(255) NOT NULL,
    last_name VARCHAR(255) NOT NULL,
    password_hash VARCHAR(255) NOT NULL,
    role VARCHAR(32) NOT NULL,
    locked BOOLEAN NOT NULL DEFAULT FALSE
);

CREATE TABLE IF NOT EXISTS products (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    price INTEGER NOT NULL CHECK (price >= 0)
);

CREATE TABLE IF NOT EXISTS pickup_locations (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL
);

CREATE TABLE IF NOT EXISTS orders (
    id SERIAL PRIMARY KEY,
    due_date DATE NOT NULL,
    due_time TIME NOT NULL,
    pickup_location_id INTEGER NOT NULL REFERENCES pickup_locations(id),
    customer_full_name VARCHAR(255) NOT NULL,
    customer_phone_number VARCHAR(20) NOT NULL,
    customer_details VARCHAR(255),
    state VARCHAR(32) NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_orders_due_date ON orders(due_date);

CREATE TABLE IF NOT EXISTS order_items (
    order_id INTEGER NOT NULL REFERENCES orders(id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    product_id INTEGER NOT NULL REFERENCES products(id),
    quantity INTEGER NOT NULL CHECK (quantity > 0),
    comment VARCHAR(255),
    PRIMARY KEY (order_id, position),
    UNIQUE (order_id, product_id)
);

CREATE TABLE IF NOT EXISTS history_items (
    order_id INTEGER NOT NULL REFERENCES orders(id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    created_by_id INTEGER NOT NULL REFERENCES users(id),
    message VARCHAR(255) NOT NULL,
    new_state VARCHAR(32),
    timestamp TIMESTAMP NOT NULL,
    PRIMARY KEY (order_id, position)
);
"""


def get_connection(
    dsn: str | None = None,
    host: str = "localhost",
    port: int = 5432,
    database: str = "bakery",
    user: str = "bakery",
    password: str = "dev_password",
) -> PgConnection:
    """
    Get a PostgreSQL connection with standard settings.

    Args:
        dsn: libpq connection string; overrides the individual settings
        host: Database host
        port: Database port
        database: Database name
        user: Database user
        password: Database password

    Returns:
        PostgreSQL connection
    """
    if dsn:
        return psycopg2.connect(dsn)
    return psycopg2.connect(
        host=host,
        port=port,
        database=database,
        user=user,
        password=password,
    )


def _require_id(entity, kind: str) -> int:
    if entity is None or entity.id is None:
        raise ValueError(f"{kind} must be saved before it can be referenced")
    return entity.id


class PostgresStore:
    """Stores backed by a psycopg2 connection."""

    def __init__(self, conn: PgConnection) -> None:
        self.conn = conn

    def create_schema(self) -> None:
        with self.conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        self.conn.commit()

    @contextmanager
    def transaction(self) -> Iterator[PostgresStore]:
        try:
            yield self
        except BaseException:
            self.conn.rollback()
            raise
        self.conn.commit()

    def count_users(self) -> int:
        with self.conn.cursor() as cur:
            cur.execute("SELECT COUNT(*) FROM users")
            return cur.fetchone()[0]

    def save_user(self, user: User) -> User:
        with self.conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO users (email, first_name, last_name, password_hash, role, locked)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING id
                """,
                (
                    user.email,
                    user.first_name,
                    user.last_name,
                    user.password_hash,
                    user.role.value,
                    user.locked,
                ),
            )
            user.id = cur.fetchone()[0]
        return user

    def save_product(self, product: Product) -> Product:
        with self.conn.cursor() as cur:
            cur.execute(
                "INSERT INTO products (name, price) VALUES (%s, %s) RETURNING id",
                (product.name, product.price),
            )
            product.id = cur.fetchone()[0]
        return product

    def save_pickup_location(self, location: PickupLocation) -> PickupLocation:
        with self.conn.cursor() as cur:
            cur.execute(
                "INSERT INTO pickup_locations (name) VALUES (%s) RETURNING id",
                (location.name,),
            )
            location.id = cur.fetchone()[0]
        return location

    def save_order(self, order: Order) -> Order:
        """Insert the order row, then its items and history in position order."""
        location_id = _require_id(order.pickup_location, "PickupLocation")
        with self.conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO orders (
                    due_date, due_time, pickup_location_id,
                    customer_full_name, customer_phone_number, customer_details, state
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING id
                """,
                (
                    order.due_date,
                    order.due_time,
                    location_id,
                    order.customer.full_name,
                    order.customer.phone_number,
                    order.customer.details,
                    order.state.value if order.state else None,
                ),
            )
            order.id = cur.fetchone()[0]

            cur.executemany(
                """
                INSERT INTO order_items (order_id, position, product_id, quantity, comment)
                VALUES (%s, %s, %s, %s, %s)
                """,
                [
                    (order.id, pos, _require_id(item.product, "Product"), item.quantity, item.comment)
                    for pos, item in enumerate(order.items)
                ],
            )
            cur.executemany(
                """
                INSERT INTO history_items (order_id, position, created_by_id, message, new_state, timestamp)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                [
                    (
                        order.id,
                        pos,
                        _require_id(entry.created_by, "User"),
                        entry.message,
                        entry.new_state.value if entry.new_state else None,
                        entry.timestamp,
                    )
                    for pos, entry in enumerate(order.history)
                ],
            )
        return order
