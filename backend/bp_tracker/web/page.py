"""
Tracker page DOM: selectors, stat cards and the result panel.

The document is a BeautifulSoup tree. The server uses these helpers to render
the first page and the form controller uses them to patch the page in place
after a submit, so both sides produce identical markup.
"""

from __future__ import annotations

import enum
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup, Tag

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

FORM_SELECTOR = "#readingForm"
SUBMIT_BUTTON_SELECTOR = ".submit-btn"
RESULT_SELECTOR = "#result"
CLASSIFICATION_SELECTOR = ".classification"
RECOMMENDATION_SELECTOR = ".recommendation"
STATS_SECTION_SELECTOR = ".stats-section"
STATS_GRID_SELECTOR = ".stats-grid"
STAT_CARD_SELECTOR = ".stat-card"
LAST_READING_SELECTOR = ".last-reading"

HIDDEN_CLASS = "hidden"
ERROR_CATEGORY = "crisis"


class AveragePeriod(str, enum.Enum):
    """Rolling-average windows; the value is the stats key and the card's data-period."""

    SEVEN_DAY = "seven_day_avg"
    THIRTY_DAY = "thirty_day_avg"
    ALL_TIME = "all_time_avg"

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]


_PERIOD_LABELS = {
    AveragePeriod.SEVEN_DAY: "7-Day Average",
    AveragePeriod.THIRTY_DAY: "30-Day Average",
    AveragePeriod.ALL_TIME: "All-Time Average",
}


class PageStructureError(LookupError):
    """The document lacks an element the page contract requires."""


@lru_cache(maxsize=1)
def _index_source() -> str:
    return (TEMPLATES_DIR / "index.html").read_text(encoding="utf-8")


def load_index() -> BeautifulSoup:
    """Fresh, mutable copy of the tracker page."""
    return parse_document(_index_source())


def parse_document(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def require(root: BeautifulSoup | Tag, selector: str) -> Tag:
    el = root.select_one(selector)
    if el is None:
        raise PageStructureError(f"missing element {selector!r}")
    return el


def get_classes(el: Tag) -> list[str]:
    classes = el.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def set_classes(el: Tag, classes: list[str]) -> None:
    el["class"] = classes


def add_class(el: Tag, name: str) -> None:
    classes = get_classes(el)
    if name not in classes:
        classes.append(name)
    set_classes(el, classes)


def remove_class(el: Tag, name: str) -> None:
    set_classes(el, [c for c in get_classes(el) if c != name])


def category_class(name: str) -> str:
    """CSS category for a classification name: lower-cased, first space dropped."""
    return name.lower().replace(" ", "", 1)


def _field(avg: dict | None, key: str) -> Any:
    if not avg:
        return ""
    value = avg.get(key)
    return "" if value is None else value


def format_pressure(avg: dict | None) -> str:
    return f"{_field(avg, 'systolic')}/{_field(avg, 'diastolic')} mmHg"


def format_pulse(avg: dict | None) -> str:
    return f"Pulse: {_field(avg, 'pulse')} bpm"


def _new_card(document: BeautifulSoup, period: AveragePeriod, avg: dict | None) -> Tag:
    card = document.new_tag("div", attrs={"class": ["stat-card"], "data-period": period.value})
    heading = document.new_tag("h3")
    heading.string = period.label
    pressure = document.new_tag("p")
    pressure.string = format_pressure(avg)
    pulse = document.new_tag("p")
    pulse.string = format_pulse(avg)
    card.append(heading)
    card.append(pressure)
    card.append(pulse)
    return card


def find_card(document: BeautifulSoup, period: AveragePeriod) -> Tag | None:
    """Card for a period: by data-period, else by exact heading text (pages rendered without the attribute)."""
    card = document.select_one(f'{STAT_CARD_SELECTOR}[data-period="{period.value}"]')
    if card is not None:
        return card
    for candidate in document.select(STAT_CARD_SELECTOR):
        heading = candidate.find("h3")
        if heading is not None and heading.get_text() == period.label:
            return candidate
    return None


def update_average_card(document: BeautifulSoup, period: AveragePeriod, avg: dict | None) -> bool:
    """Overwrite one card's two lines. Returns False when there is no data or no matching card."""
    if not avg:
        return False
    card = find_card(document, period)
    if card is None:
        return False
    paragraphs = card.find_all("p")
    if len(paragraphs) < 2:
        return False
    paragraphs[0].string = format_pressure(avg)
    paragraphs[1].string = format_pulse(avg)
    return True


def update_stats_display(document: BeautifulSoup, stats: dict | None) -> None:
    """
    Create the stats grid and cards on first use, otherwise update cards in place.

    Cards are created only when none exist yet and a 7-day average is present;
    later calls never add cards, so rendering the same stats twice is a no-op.
    """
    stats = stats or {}
    grid = document.select_one(STATS_GRID_SELECTOR)
    if grid is None:
        section = require(document, STATS_SECTION_SELECTOR)
        grid = document.new_tag("div", attrs={"class": ["stats-grid"]})
        section.insert(0, grid)

    if stats.get(AveragePeriod.SEVEN_DAY.value) and document.select_one(STAT_CARD_SELECTOR) is None:
        for period in AveragePeriod:
            grid.append(_new_card(document, period, stats.get(period.value)))
        return

    for period in AveragePeriod:
        update_average_card(document, period, stats.get(period.value))


def display_result(document: BeautifulSoup, result: dict, is_error: bool) -> None:
    """Show the result panel: either "Error: ..." styled as crisis, or the classification and recommendation."""
    panel = require(document, RESULT_SELECTOR)
    remove_class(panel, HIDDEN_CLASS)
    classification_el = require(panel, CLASSIFICATION_SELECTOR)
    recommendation_el = require(panel, RECOMMENDATION_SELECTOR)

    if is_error:
        classification_el.string = f"Error: {result.get('error')}"
        set_classes(classification_el, ["classification", ERROR_CATEGORY])
        recommendation_el.string = ""
        return

    name = result["classification"]["Name"]
    classification_el.string = f"Classification: {name}"
    set_classes(classification_el, f"classification {category_class(name)}".split())
    recommendation_el.string = result["recommendation"]


def render_last_reading(document: BeautifulSoup, reading: dict | None) -> None:
    panel = document.select_one(LAST_READING_SELECTOR)
    if panel is None:
        return
    if not reading:
        add_class(panel, HIDDEN_CLASS)
        return
    remove_class(panel, HIDDEN_CLASS)
    taken = reading.get("timestamp")
    if isinstance(taken, str):
        taken = datetime.fromisoformat(taken)
    require(panel, ".last-reading-time").string = taken.strftime("%Y-%m-%d %H:%M") if taken else ""
    require(panel, ".last-reading-pressure").string = format_pressure(reading)
    require(panel, ".last-reading-pulse").string = format_pulse(reading)
    require(panel, ".last-reading-classification").string = reading.get("classification") or ""


def render_index(stats: dict | None) -> str:
    """Tracker page with the current stats filled in."""
    document = load_index()
    if stats:
        update_stats_display(document, stats)
        render_last_reading(document, stats.get("last_reading"))
    return str(document)
