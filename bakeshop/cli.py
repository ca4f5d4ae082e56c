"""Maintenance commands registered on ``flask``."""

import click
from flask.cli import AppGroup

from bakeshop.services.banners import normalize_banner_order
from bakeshop.services.notifier import retry_failed_notifications

notifications_cli = AppGroup('notifications', help='Order webhook maintenance.')
banners_cli = AppGroup('banners', help='Banner maintenance.')


@notifications_cli.command('retry')
def retry_notifications():
    """Resend order notifications that failed earlier."""
    delivered, failing = retry_failed_notifications()
    click.echo(f'{delivered} delivered, {failing} still failing')


@banners_cli.command('normalize')
def normalize_banners():
    """Renumber banner display order to 0..N-1."""
    normalize_banner_order()
    click.echo('Banner order normalized.')


def register_commands(app):
    app.cli.add_command(notifications_cli)
    app.cli.add_command(banners_cli)
