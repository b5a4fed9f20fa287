"""CLI commands for database setup."""

from __future__ import annotations

import click

from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.persistence.sample_data import (
    create_schema,
    load_reference_data,
    load_sample_catalog,
)


@click.command("init")
@click.option("--sample", is_flag=True, default=False, help="Also load a small sample catalog.")
@click.pass_obj
def db_init(container: Container, sample: bool) -> None:
    """Create the tables and reference data (colors, sizes, categories)."""
    create_schema(container.engine)
    with container.engine.begin() as conn:
        load_reference_data(conn)
        count = load_sample_catalog(conn) if sample else 0

    click.echo("Database initialised.")
    if sample:
        click.echo(f"Loaded {count} sample variants.")
