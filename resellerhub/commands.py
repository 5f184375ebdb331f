import json
import click
from flask.cli import with_appcontext
from .extensions import db
from .services.stats_service import StatsService

@click.command('init-db')
@with_appcontext
def init_db_command():
    """Drop all tables and create them again."""
    try:
        db.drop_all()
        db.create_all()
        click.echo('Initialized the database.')
    except Exception as e:
        click.echo(f'Error initializing database: {e}', err=True)
        raise click.exceptions.Exit(1)

@click.command('stats')
@with_appcontext
def stats_command():
    """Print the order and shipment dashboard statistics."""
    service = StatsService()
    for title, result in (('Orders', service.get_order_stats()),
                          ('Shipments', service.get_shipment_stats())):
        if not result['success']:
            click.echo(f"{title}: {result['error']}", err=True)
            raise click.exceptions.Exit(1)
        click.echo(f'{title}:')
        click.echo(json.dumps(result['stats'], indent=2, default=str))
