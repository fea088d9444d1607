#!/usr/bin/env python3
"""Send a contact message through the site's form flow from a terminal.

Usage:
    python tools/send_contact.py --name Jo --email jo@example.com --message Hi
    python tools/send_contact.py --base-url https://80ktwins.com ...
"""

import argparse
import asyncio
import sys

import httpx

from twins.client import ContactFormController, MemoryForm, SubmitOutcome
from twins.config import settings
from twins.observability import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--name", default="")
    parser.add_argument("--email", default="")
    parser.add_argument("--message", default="")
    parser.add_argument("--base-url", default=settings.base_url)
    return parser.parse_args(argv)


async def send(args: argparse.Namespace) -> int:
    form = MemoryForm(
        values={"name": args.name, "email": args.email, "message": args.message}
    )
    async with httpx.AsyncClient(base_url=args.base_url, timeout=15.0) as client:
        outcome = await ContactFormController(form, client).submit()

    for field_name, slot in form.errors.items():
        if slot.text:
            print(f"  {field_name}: {slot.text}", file=sys.stderr)
    stream = sys.stdout if outcome is SubmitOutcome.SENT else sys.stderr
    print(form.status.text, file=stream)
    return 0 if outcome is SubmitOutcome.SENT else 1


if __name__ == "__main__":
    configure_logging(settings.log_level.upper())
    sys.exit(asyncio.run(send(parse_args())))
