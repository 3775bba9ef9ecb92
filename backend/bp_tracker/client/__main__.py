"""
Headless tracker client: load the page, fill the reading form, submit it and print what the page shows.

Usage: python -m bp_tracker.client [--url http://localhost:8000] S1 D1 P1 S2 D2 P2 S3 D3 P3
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import httpx
from bs4 import BeautifulSoup

from bp_tracker.client.controller import FormController
from bp_tracker.client.form import fill_form, form_fields
from bp_tracker.config import settings
from bp_tracker.web.page import (
    CLASSIFICATION_SELECTOR,
    RECOMMENDATION_SELECTOR,
    STAT_CARD_SELECTOR,
    parse_document,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bp_tracker.client", description="Submit one blood pressure session")
    parser.add_argument("--url", default=settings.client_base_url, help="Tracker base URL")
    parser.add_argument("--timeout", type=float, default=settings.client_timeout_seconds)
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument(
        "values",
        nargs="+",
        metavar="VALUE",
        help="Form values in page order: systolic diastolic pulse, three times",
    )
    return parser


def render_summary(document: BeautifulSoup) -> str:
    """Plain-text view of the result panel and stat cards."""
    lines = []
    classification = document.select_one(CLASSIFICATION_SELECTOR)
    recommendation = document.select_one(RECOMMENDATION_SELECTOR)
    if classification is not None and classification.get_text():
        lines.append(classification.get_text())
    if recommendation is not None and recommendation.get_text():
        lines.append(recommendation.get_text())
    for card in document.select(STAT_CARD_SELECTOR):
        heading = card.find("h3")
        body = ", ".join(p.get_text() for p in card.find_all("p"))
        lines.append(f"{heading.get_text() if heading else '?'}: {body}")
    return "\n".join(lines)


async def run(
    url: str,
    values: list[str],
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    async with httpx.AsyncClient(base_url=url, timeout=timeout, transport=transport) as client:
        try:
            r = await client.get("/")
            r.raise_for_status()
        except httpx.HTTPError as e:
            print(f"Could not load tracker page from {url}: {e}", file=sys.stderr)
            return 1
        document = parse_document(r.text)
        controller = FormController(document, client)
        names = [el["name"] for el in form_fields(controller.form)]
        if len(values) != len(names):
            print(f"Expected {len(names)} values ({' '.join(names)}), got {len(values)}", file=sys.stderr)
            return 2
        fill_form(controller.form, dict(zip(names, values)))
        outcome = await controller.submit()
    print(render_summary(document))
    return 0 if outcome.ok else 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return asyncio.run(run(args.url, args.values, args.timeout))


if __name__ == "__main__":
    sys.exit(main())
