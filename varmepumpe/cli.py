"""
Flask CLI commands:  flask init-db | create-superadmin | seed-postal-codes
"""
import os

import click
from flask import current_app

from varmepumpe import db
from varmepumpe.services import accounts, postal_codes


def register_commands(app):

    @app.cli.command('init-db')
    def init_db():
        """Create tables and seed reference postal codes."""
        db.create_all()
        inserted = postal_codes.seed_postal_codes()
        click.echo('Database tables created.')
        click.echo('  -> {} postal code(s) seeded'.format(inserted))

    @app.cli.command('seed-postal-codes')
    def seed_postal_codes():
        """Insert the reference postal codes if the table is empty."""
        inserted = postal_codes.seed_postal_codes()
        click.echo('{} postal code(s) seeded'.format(inserted))

    @app.cli.command('create-superadmin')
    @click.option('--password', default=None, help='Defaults to $SUPERADMIN_PASSWORD.')
    @click.option('--email', default=None, help='Defaults to SUPERADMIN_EMAIL from config.')
    def create_superadmin(password, email):
        """Create the 'admin' user if it does not exist."""
        password = password or os.environ.get('SUPERADMIN_PASSWORD')
        if not password:
            raise click.UsageError('Pass --password or set SUPERADMIN_PASSWORD')
        min_length = current_app.config['PASSWORD_MIN_LENGTH']
        if len(password) < min_length:
            raise click.UsageError('Password must be at least {} characters'.format(min_length))

        user, created = accounts.create_superadmin(
            password, email or current_app.config['SUPERADMIN_EMAIL']
        )
        if created:
            click.echo('Superadmin {} created.'.format(user.username))
        else:
            click.echo('Superadmin {} already exists.'.format(user.username))
