"""
Verify CLI

Sends a verification code to a phone number and checks the codes typed on
stdin until a code matches or the request ends.
Credentials come from the VONAGE_* environment variables.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional, TextIO

import click
from pydantic import ValidationError

from .client import Client
from .domain.entities import CodeLength, Workflow
from .domain.errors import VonageError
from .application.verify.pending import Match
from .env import get_settings

logger = logging.getLogger(__name__)


async def run_verification(
    client: Client,
    phone: str,
    brand: str,
    *,
    code_length: Optional[int] = None,
    pin_expiry: Optional[int] = None,
    workflow: Optional[int] = None,
    stdin: Optional[TextIO] = None,
) -> bool:
    """Drive one verification interactively; return True when a code matched."""
    builder = client.verify(phone, brand)
    if code_length is not None:
        builder.code_length(CodeLength(code_length))
    if pin_expiry is not None:
        builder.pin_expiry(pin_expiry)
    if workflow is not None:
        builder.workflow(Workflow(workflow))

    pending = await builder.send()
    click.echo(f"Created verify request with ID: {pending.request_id}")

    stream = stdin or sys.stdin
    while True:
        line = await asyncio.to_thread(stream.readline)
        if not line:
            break
        code = line.strip()
        if not code:
            continue
        result = await pending.check(code)
        if isinstance(result, Match):
            click.echo(f"Code matches! event {result.verified.event_id}")
            return True
        pending = result.pending
        click.echo(f"Code mismatch! Remaining: {pending.attempts_remaining}", err=True)

    click.echo("No more input; cancelling", err=True)
    await pending.cancel()
    return False


@click.command()
@click.argument("phone")
@click.option("--brand", "-b", default="vonage-verify", show_default=True, help="Brand named in the message")
@click.option("--code-length", type=click.Choice(["4", "6"]), default=None, help="Digits in the code")
@click.option("--pin-expiry", type=click.IntRange(60, 3600), default=None, help="Code validity in seconds")
@click.option("--workflow", type=click.IntRange(1, 7), default=None, help="Delivery workflow id")
def cli(
    phone: str,
    brand: str,
    code_length: Optional[str],
    pin_expiry: Optional[int],
    workflow: Optional[int],
) -> None:
    """Verify PHONE by sending it a one-time code."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    async def _run() -> bool:
        async with Client.from_settings(settings) as client:
            return await run_verification(
                client,
                phone,
                brand,
                code_length=int(code_length) if code_length else None,
                pin_expiry=pin_expiry,
                workflow=workflow,
            )

    try:
        matched = asyncio.run(_run())
    except VonageError as e:
        logger.error("Verification failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except ValidationError as e:
        reasons = "; ".join(err["msg"] for err in e.errors())
        logger.error("Invalid verify request: %s", reasons)
        click.echo(f"Error: invalid input: {reasons}", err=True)
        sys.exit(1)
    sys.exit(0 if matched else 1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
