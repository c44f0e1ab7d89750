"""
Command line adapter over the replacement-schedule core.

Product records are read from a JSON file holding a list of camelCase records,
the same shape the app stores.
"""
import json
import logging

import click

from .config import load_settings
from .errors import BathlanceError
from .logging_config import configure_logging
from .models import Product
from .services import (
    ExpiryService,
    NotificationService,
    NotificationState,
    ReplacementService,
    build_shopping_links,
)
from .utils.date_math import format_instant, parse_instant
from .utils.timezone_utils import TimezoneUtils

logger = logging.getLogger(__name__)


def _parse_option_instant(value):
    if value is None:
        return None
    try:
        return parse_instant(value)
    except BathlanceError as exc:
        raise click.BadParameter(str(exc)) from exc


def _load_products(path):
    try:
        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(records, list):
        raise click.ClickException(f"{path} must contain a JSON list of product records")
    try:
        return [Product.from_dict(record) for record in records]
    except BathlanceError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.option('--log-level', default=None, help='Override LOG_LEVEL for this run')
@click.pass_context
def cli(ctx, log_level):
    """Bathroom product replacement tracker."""
    settings = load_settings()
    configure_logging(log_level or settings.log_level, redact_pii=settings.log_redact_pii)
    for warning in settings.warnings:
        logger.warning(warning)
    ctx.obj = {
        'settings': settings,
        'expiry_service': ExpiryService.from_settings(settings),
    }


@cli.command('expiry')
@click.option('--registered', required=True, help='Opening date (ISO 8601)')
@click.option('--months', type=int, default=None, help='Usage period after opening, in months')
@click.option('--category', default='other', show_default=True, help='Category used when --months is omitted')
@click.option('--manufactured', default=None, help='Manufacturing date (ISO 8601)')
@click.option('--shelf-life', type=int, default=None, help='Shelf life before opening, in months')
@click.pass_obj
def expiry_command(obj, registered, months, category, manufactured, shelf_life):
    """Compute the replacement date for one product"""
    expiry_service = obj['expiry_service']
    try:
        product = Product(
            id='cli',
            name='',
            category=category,
            registration_date=parse_instant(registered),
            manufacturing_date=manufactured,
            expiry_period_before_opening=shelf_life,
            period_after_opening=months,
        )
        expiry = expiry_service.expiry_for(product)
    except BathlanceError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(format_instant(expiry))


@cli.command('remind')
@click.argument('products_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--days', type=int, default=None, help='Lead time in days (defaults to BATHLANCE_NOTIFICATION_DAYS)')
@click.option('--shopping-list', 'shopping_list', multiple=True, help='Product id already on the shopping list')
@click.option('--now', default=None, help='Evaluate as of this instant (ISO 8601)')
@click.option('--as-json', is_flag=True, help='Print events as JSON')
@click.pass_obj
def remind_command(obj, products_file, days, shopping_list, now, as_json):
    """Print due replacement reminders and restock requests"""
    settings = obj['settings']
    products = _load_products(products_file)
    now_utc = _parse_option_instant(now)

    try:
        service = NotificationService(
            lead_days=settings.notification_days if days is None else days,
            expiry_service=obj['expiry_service'],
        )
    except BathlanceError as exc:
        raise click.BadParameter(str(exc), param_hint='--days') from exc

    state = NotificationState()
    try:
        reminders = service.check_products(products, state, now=now_utc)
    except BathlanceError as exc:
        raise click.ClickException(str(exc)) from exc
    restock = service.collect_restock_intents(products, shopping_list, state)

    if as_json:
        click.echo(json.dumps({
            'reminders': [reminder.to_dict() for reminder in reminders],
            'shoppingList': [intent.to_dict() for intent in restock],
        }, ensure_ascii=False, indent=2))
        return

    by_id = {product.id: product for product in products}
    if not reminders and not restock:
        click.echo("ℹ️  Nothing needs replacing yet.")
    for reminder in reminders:
        product = by_id[reminder.product_id]
        expiry = product.expiry_date or obj['expiry_service'].expiry_for(product)
        local_day = TimezoneUtils.format_for_user(expiry, tz_name=settings.timezone)
        click.echo(f"🧴 {reminder.message} (replace by {local_day})")
        click.echo(f"   {build_shopping_links(product.name, product.category)['naver']}")
    for intent in restock:
        click.echo(f'🛒 "{intent.product_name}" is out of stock; add it to the shopping list.')


@cli.command('replace')
@click.argument('products_file', type=click.Path(exists=True, dir_okay=False))
@click.argument('product_id')
@click.option('--on-shopping-list', is_flag=True, help='The product is already on the shopping list')
@click.option('--now', default=None, help='Replacement instant (ISO 8601); defaults to now')
@click.pass_obj
def replace_command(obj, products_file, product_id, on_shopping_list, now):
    """Open a new unit of PRODUCT_ID and print the updated record"""
    products = _load_products(products_file)
    product = next((p for p in products if p.id == product_id), None)
    if product is None:
        raise click.ClickException(f"No product with id {product_id!r} in {products_file}")

    service = ReplacementService(obj['expiry_service'])
    try:
        result = service.replace(product, already_on_shopping_list=on_shopping_list, now=_parse_option_instant(now))
    except BathlanceError as exc:
        raise click.ClickException(str(exc)) from exc

    intent = result.shopping_list_intent
    click.echo(json.dumps({
        'product': result.product.to_dict(),
        'shoppingListIntent': intent.to_dict() if intent else None,
    }, ensure_ascii=False, indent=2))


def main():
    cli(prog_name='bathlance')


if __name__ == '__main__':
    main()
