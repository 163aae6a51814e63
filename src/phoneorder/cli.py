"""Command-line interface for phoneorder."""

import argparse
import json
import logging
import os
import sys
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from . import __version__
from .calc import calculate_order_total
from .catalog import ProductCatalog
from .errors import InvalidOrderFileError, PhoneorderError
from .models import CalculationResult, OrderQuote
from .orders import quote_order
from .schemas import CalculateRequest, OrderRequest
from .settings_store import SettingsStore

EXIT_PAYMENT_REJECTED = 2

RequestT = TypeVar("RequestT", bound=BaseModel)


def configure_logging(verbose: bool = False) -> None:
    """Configure the phoneorder logger from --verbose or PHONEORDER_LOG_LEVEL."""
    level = "DEBUG" if verbose else os.environ.get("PHONEORDER_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    reason = f"{location}: {first['msg']}" if location else first["msg"]
    if error.error_count() > 1:
        reason += f" (and {error.error_count() - 1} more)"
    return reason


def load_order_file(path: str, schema: type[RequestT]) -> RequestT:
    """
    Read an order JSON document and validate it against a request schema.

    Raises:
        InvalidOrderFileError: If the file is missing, not JSON, or does not
            match the schema.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InvalidOrderFileError(path, e.strerror or str(e)) from None
    except json.JSONDecodeError as e:
        raise InvalidOrderFileError(path, f"not valid JSON ({e.msg})") from None

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise InvalidOrderFileError(path, _describe_validation_error(e)) from None


def format_result(result: CalculationResult, discount: int) -> str:
    """Format a totals breakdown for terminal output."""
    rows = [
        ("Subtotal", result.subtotal),
        ("Shipping", result.total_shipping_fee),
        ("Wrapping", result.total_wrapping_fee),
        ("Discount", -discount),
        ("Payment fee", result.total_fee),
        ("Total", result.total_amount),
    ]
    lines = [f"  {label + ':':<13}{amount:>12,}" for label, amount in rows]
    if result.payment_fee_error:
        lines.append("")
        lines.append(f"  BLOCKED: {result.payment_fee_error}")
    return "\n".join(lines)


def _print_line_table(rows: list[tuple[str, int, int, int]]) -> None:
    print(f"  {'Line':<24}{'Amount':>10}{'Shipping':>10}{'Wrapping':>10}")
    for label, line_total, shipping_fee, wrapping_fee in rows:
        print(f"  {label:<24}{line_total:>10,}{shipping_fee:>10,}{wrapping_fee:>10,}")
    print()


def cmd_calc(args: argparse.Namespace) -> int:
    """Calculate totals for lines that already carry unit prices."""
    try:
        request = load_order_file(args.order_file, CalculateRequest)
        settings = SettingsStore().load()

        default_shipping_fee = request.default_shipping_fee
        if default_shipping_fee is None:
            default_shipping_fee = settings.default_shipping_fee
        free_shipping_threshold = request.free_shipping_threshold
        if free_shipping_threshold is None:
            free_shipping_threshold = settings.free_shipping_threshold

        items = request.to_line_items()
        discount = request.discount
        result = calculate_order_total(
            items,
            request.payment_method,
            discount,
            default_shipping_fee,
            free_shipping_threshold,
        )

        if args.json:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            _print_line_table(
                [
                    (f"#{item.line_index}", *fees)
                    for item, *fees in zip(
                        items, result.line_totals, result.shipping_fees, result.wrapping_fees
                    )
                ]
            )
            print(format_result(result, discount))

        return EXIT_PAYMENT_REJECTED if result.payment_fee_error else 0

    except PhoneorderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _print_quote(quote: OrderQuote) -> None:
    _print_line_table(
        [
            (
                f"{line.line_number}. {line.product_name} x{line.quantity}",
                line.line_total,
                line.shipping_fee,
                line.wrapping_fee,
            )
            for line in quote.lines
        ]
    )
    if quote.early_price_applied:
        print("  (early prices applied)")
    print(format_result(quote.result, quote.discount))


def cmd_quote(args: argparse.Namespace) -> int:
    """Price an order from the product catalog."""
    try:
        request = load_order_file(args.order_file, OrderRequest)

        quote = quote_order(
            request.to_order_lines(),
            request.payment_method,
            request.discount,
            ProductCatalog(),
            SettingsStore().load(),
        )

        if args.json:
            print(json.dumps(quote.to_dict(), indent=2))
        else:
            _print_quote(quote)

        return EXIT_PAYMENT_REJECTED if quote.result.payment_fee_error else 0

    except PhoneorderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_settings_show(args: argparse.Namespace) -> int:
    """Show the application settings."""
    try:
        store = SettingsStore()
        settings = store.load()

        if args.json:
            print(json.dumps(settings.to_dict(), indent=2))
            return 0

        if not store.exists():
            print("(defaults, no settings saved yet)")
        print(f"default_shipping_fee:    {settings.default_shipping_fee}")
        print(f"free_shipping_threshold: {settings.free_shipping_threshold}")
        print(f"early_price_deadline:    {settings.early_price_deadline}")
        return 0

    except PhoneorderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_settings_set(args: argparse.Namespace) -> int:
    """Set one application setting."""
    try:
        settings = SettingsStore().set(args.key, args.value)
        print(f"Set {args.key} = {getattr(settings, args.key)}")
        return 0

    except PhoneorderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server."""
    try:
        import uvicorn

        store = SettingsStore()
        if not store.exists():
            print("Warning: no settings saved, using defaults.", file=sys.stderr)

        print("Starting phoneorder API server...")
        print(f"Data directory: {store.config_dir}")
        print(f"API docs: http://{args.host}:{args.port}/docs")
        print()

        # When reload is enabled, uvicorn requires the app as an import string
        app_target = "phoneorder.api:app" if args.reload else None
        if app_target is None:
            from .api import app
            app_target = app

        uvicorn.run(
            app_target,
            host=args.host,
            port=args.port,
            reload=args.reload,
        )
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="phoneorder",
        description="Phone-order pricing: shipping, wrapping and payment fees",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # calc
    calc_parser = subparsers.add_parser(
        "calc", help="Calculate totals for lines with unit prices"
    )
    calc_parser.add_argument("order_file", help="Path to order JSON")
    calc_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # quote
    quote_parser = subparsers.add_parser(
        "quote", help="Price an order from the product catalog"
    )
    quote_parser.add_argument("order_file", help="Path to order JSON")
    quote_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port", "-p", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # settings (subcommand group)
    settings_parser = subparsers.add_parser("settings", help="Manage application settings")
    settings_subparsers = settings_parser.add_subparsers(dest="settings_command")

    # settings show
    settings_show_parser = settings_subparsers.add_parser("show", help="Show settings")
    settings_show_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # settings set
    settings_set_parser = settings_subparsers.add_parser("set", help="Set a setting")
    settings_set_parser.add_argument("key", help="Setting key")
    settings_set_parser.add_argument("value", help="New value")

    return parser


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    # Handle settings subcommands
    if args.command == "settings":
        if not getattr(args, "settings_command", None):
            parser.parse_args(["settings", "--help"])
            return 0
        if args.settings_command == "show":
            return cmd_settings_show(args)
        elif args.settings_command == "set":
            return cmd_settings_set(args)

    commands = {
        "calc": cmd_calc,
        "quote": cmd_quote,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
