from __future__ import annotations

import click
from flask import Blueprint

from motoparts.app.extensions import db
from motoparts.app.storage import catalog

cli_bp = Blueprint("cli", __name__, cli_group=None)


@cli_bp.cli.command("init-db")
@click.option("--drop", is_flag=True, help="Drop existing tables first.")
def init_db(drop: bool) -> None:
    """Create the key-value table backing the catalog."""
    if drop:
        db.drop_all()
    db.create_all()
    click.echo("init-db: done")


@cli_bp.cli.command("seed")
def seed_data() -> None:
    """Seed the default catalog.

    Safe to run multiple times; it will no-op if a catalog exists.
    """
    products = catalog.products.products
    click.echo(f"Seed complete. Catalog has {len(products)} products.")
