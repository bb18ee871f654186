"""
Command-line interface for the Wordy API client.

Provides one command per common API operation:
- info, estimate, statistics, testimonial: public service information
- account, users, customer: account details
- document, download, cancel, reedit: document management
- order: create an order from fields given on the command line
- payment-url: print the payment page of an order

Usage:
    wordy info
    wordy estimate 350
    wordy order --brief "Fix typos" --language GB \\
        --field "post_title:shorttext:Hello wrold" --meta source=blog
    wordy download 42 -o edited.docx

Signed commands run inside an application session that is started before
and expired after the command.

Environment Variables:
    WORDY_API_KEY, WORDY_API_SECRET, WORDY_CUSTOMER_ID: Credentials
        (not needed by the unsigned info, estimate, statistics, testimonial
        and payment-url commands)
    WORDY_API_ENDPOINT: API endpoint (default: production)
    WORDY_REQUEST_TIMEOUT: Request timeout in seconds (default: 30)
    WORDY_LOG_LEVEL: Logging level (default: WARNING)

Exit codes: 0 on success, 1 if the API reports a failure or the request
fails, 2 on invalid usage or configuration.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from wordy_client.client import WordyClient
from wordy_client.config import Config
from wordy_client.errors import WordyError
from wordy_client.models import APIResult, Field

logger = logging.getLogger(__name__)


def parse_field(text: str) -> Field:
    """
    Parse a ``title:type:value`` field argument.

    The value may itself contain colons.

    Raises:
        argparse.ArgumentTypeError: If the text has fewer than three parts.
    """
    parts = text.split(":", 2)
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"field must look like title:type:value, got {text!r}")
    title, field_type, value = parts
    return Field(title=title, type=field_type, value=value)


def parse_meta(text: str) -> tuple[str, Any]:
    """
    Parse a ``key=value`` metadata argument.

    Values that parse as a JSON list or object are sent as structured
    metadata; anything else is sent as a string.
    """
    key, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"metadata must look like key=value, got {text!r}")
    if value[:1] in ("[", "{"):
        try:
            return key, json.loads(value)
        except ValueError:
            pass
    return key, value


def print_result(result: APIResult) -> int:
    """Print a result's payload as JSON and map ``success`` to an exit code."""
    print(json.dumps(result.payload, indent=2, sort_keys=True))
    return 0 if result.success else 1


# =============================================================================
# COMMANDS
# =============================================================================


def cmd_info(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.base_info())


def cmd_estimate(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.base_estimate(args.word_count))


def cmd_statistics(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.base_statistics())


def cmd_testimonial(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.base_testimonial())


def cmd_account(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.account_info())


def cmd_users(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.account_users())


def cmd_customer(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.customer_info())


def cmd_document(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.document_info(args.document_id))


def cmd_cancel(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.document_cancel(args.document_id))


def cmd_reedit(client: WordyClient, args: argparse.Namespace) -> int:
    return print_result(client.document_reedit(args.document_id, args.message))


def cmd_download(client: WordyClient, args: argparse.Namespace) -> int:
    """Download a document; file content is written to --output or stdout."""
    result = client.document_download(args.document_id)
    if isinstance(result, APIResult):
        return print_result(result)

    if args.output:
        Path(args.output).write_bytes(result)
        print(f"Saved {len(result)} bytes to {args.output}")
    else:
        sys.stdout.buffer.write(result)
        sys.stdout.flush()
    return 0


def cmd_order(client: WordyClient, args: argparse.Namespace) -> int:
    """Create an order and print its payment page."""
    result = client.order_create(args.brief, args.language, args.fields, dict(args.meta))
    if result is None:
        print("No fields given; nothing to order.", file=sys.stderr)
        return 2

    code = print_result(result)
    if result.success and "id" in result.order:
        print(f"Pay at: {client.payment_url(result.order['id'])}")
    return code


def cmd_payment_url(client: WordyClient, args: argparse.Namespace) -> int:
    print(client.payment_url(args.order_id))
    return 0


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every subcommand."""
    parser = argparse.ArgumentParser(
        prog="wordy",
        description="Command-line client for the Wordy proofreading API",
    )
    Config.add_arguments(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add(
        name: str,
        func: Callable[[WordyClient, argparse.Namespace], int],
        help_text: str,
        signed: bool = True,
    ) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=help_text)
        sub.set_defaults(func=func, signed=signed)
        return sub

    add("info", cmd_info, "Show public service information", signed=False)
    sub = add("estimate", cmd_estimate, "Estimate price for a word count", signed=False)
    sub.add_argument("word_count", type=int)
    add("statistics", cmd_statistics, "Show service statistics", signed=False)
    add("testimonial", cmd_testimonial, "Show a customer testimonial", signed=False)
    add("account", cmd_account, "Show account information")
    add("users", cmd_users, "List account users")
    add("customer", cmd_customer, "Show customer profile")

    for name, func, help_text in (
        ("document", cmd_document, "Show document information"),
        ("cancel", cmd_cancel, "Cancel a document"),
    ):
        sub = add(name, func, help_text)
        sub.add_argument("document_id", type=int)

    sub = add("download", cmd_download, "Download an edited document")
    sub.add_argument("document_id", type=int)
    sub.add_argument("--output", "-o", default=None, help="File to write file content to")

    sub = add("reedit", cmd_reedit, "Send a document back for re-editing")
    sub.add_argument("document_id", type=int)
    sub.add_argument("message")

    sub = add("order", cmd_order, "Create an order")
    sub.add_argument("--brief", required=True, help="Instructions for the editor")
    sub.add_argument("--language", required=True, help="Language code, e.g. GB, US, DE")
    sub.add_argument(
        "--field",
        dest="fields",
        type=parse_field,
        action="append",
        default=[],
        help="Field as title:type:value (repeatable)",
    )
    sub.add_argument(
        "--meta",
        type=parse_meta,
        action="append",
        default=[],
        help="Metadata as key=value (repeatable)",
    )

    sub = add("payment-url", cmd_payment_url, "Print the payment page of an order", signed=False)
    sub.add_argument("order_id")

    return parser


def run_command(client: WordyClient, args: argparse.Namespace) -> int:
    """
    Run a parsed command, inside an application session if it is signed.

    Returns:
        Exit code of the command, or 1 if the session could not be started.
        A failure to expire the session afterwards is logged, not returned.
    """
    if not args.signed:
        return int(args.func(client, args))

    session = client.application_startsession()
    if not session.success:
        print(f"Could not start session: {session.error}", file=sys.stderr)
        return 1
    try:
        return int(args.func(client, args))
    finally:
        # A failed expiry must not replace the command's own outcome.
        try:
            client.application_expiresession()
        except WordyError as e:
            logger.warning("Could not expire session: %s", e)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point of the ``wordy`` console script.

    Returns:
        0 on success, 1 on API or transport failure, 2 on usage errors.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_namespace(args, require_credentials=args.signed)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        with WordyClient.from_config(config) as client:
            return run_command(client, args)
    except WordyError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
