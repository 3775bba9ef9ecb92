"""Tests for stat card and result panel rendering on the tracker page."""

from bp_tracker.web.page import (
    AveragePeriod,
    category_class,
    display_result,
    find_card,
    get_classes,
    parse_document,
    render_index,
    update_stats_display,
)

STATS = {
    "seven_day_avg": {"systolic": 118, "diastolic": 79, "pulse": 72},
    "thirty_day_avg": {"systolic": 121, "diastolic": 80, "pulse": 70},
    "all_time_avg": {"systolic": 125, "diastolic": 82, "pulse": 71},
}


def _card_texts(document):
    return [[el.get_text() for el in card.find_all(["h3", "p"])] for card in document.select(".stat-card")]


def test_creates_grid_as_first_child_of_stats_section(page):
    update_stats_display(page, STATS)
    section = page.select_one(".stats-section")
    first = next(child for child in section.children if getattr(child, "name", None))
    assert "stats-grid" in get_classes(first)


def test_creates_three_cards(page):
    update_stats_display(page, STATS)
    assert _card_texts(page) == [
        ["7-Day Average", "118/79 mmHg", "Pulse: 72 bpm"],
        ["30-Day Average", "121/80 mmHg", "Pulse: 70 bpm"],
        ["All-Time Average", "125/82 mmHg", "Pulse: 71 bpm"],
    ]
    assert [c["data-period"] for c in page.select(".stat-card")] == [p.value for p in AveragePeriod]


def test_render_twice_is_idempotent(page):
    update_stats_display(page, STATS)
    first = _card_texts(page)
    update_stats_display(page, STATS)
    assert _card_texts(page) == first
    assert len(page.select(".stats-grid")) == 1


def test_no_cards_without_seven_day_average(page):
    update_stats_display(page, {"seven_day_avg": None, "all_time_avg": STATS["all_time_avg"]})
    assert page.select(".stat-card") == []
    assert page.select_one(".stats-grid") is not None


def test_missing_thirty_day_keeps_previous_card_text(page):
    update_stats_display(page, STATS)
    update_stats_display(
        page,
        {
            "seven_day_avg": {"systolic": 130, "diastolic": 85, "pulse": 75},
            "thirty_day_avg": None,
            "all_time_avg": {"systolic": 126, "diastolic": 83, "pulse": 72},
        },
    )
    assert _card_texts(page) == [
        ["7-Day Average", "130/85 mmHg", "Pulse: 75 bpm"],
        ["30-Day Average", "121/80 mmHg", "Pulse: 70 bpm"],
        ["All-Time Average", "126/83 mmHg", "Pulse: 72 bpm"],
    ]


def test_creating_cards_with_missing_averages(page):
    update_stats_display(page, {"seven_day_avg": STATS["seven_day_avg"]})
    assert _card_texts(page)[1] == ["30-Day Average", "/ mmHg", "Pulse:  bpm"]


def test_cards_matched_by_heading_when_untagged():
    document = parse_document(
        '<section class="stats-section"><div class="stats-grid">'
        '<div class="stat-card"><h3>30-Day Average</h3><p>1/1 mmHg</p><p>Pulse: 1 bpm</p></div>'
        "</div></section>"
    )
    update_stats_display(document, {"thirty_day_avg": {"systolic": 122, "diastolic": 81, "pulse": 69}})
    card = find_card(document, AveragePeriod.THIRTY_DAY)
    assert [p.get_text() for p in card.find_all("p")] == ["122/81 mmHg", "Pulse: 69 bpm"]
    assert find_card(document, AveragePeriod.SEVEN_DAY) is None


def test_display_success_result(page):
    display_result(
        page,
        {"classification": {"Name": "Normal"}, "recommendation": "Maintain"},
        is_error=False,
    )
    panel = page.select_one("#result")
    assert "hidden" not in get_classes(panel)
    classification = panel.select_one(".classification")
    assert classification.get_text() == "Classification: Normal"
    assert get_classes(classification) == ["classification", "normal"]
    assert panel.select_one(".recommendation").get_text() == "Maintain"


def test_display_error_result(page):
    display_result(page, {"classification": {"Name": "Normal"}, "recommendation": "Maintain"}, is_error=False)
    display_result(page, {"error": "Invalid input format"}, is_error=True)
    classification = page.select_one("#result .classification")
    assert classification.get_text() == "Error: Invalid input format"
    assert get_classes(classification) == ["classification", "crisis"]
    assert page.select_one("#result .recommendation").get_text() == ""


def test_category_class_drops_only_first_space():
    assert category_class("Normal") == "normal"
    assert category_class("Hypertensive Crisis") == "hypertensivecrisis"
    assert category_class("Hypertension Stage 1") == "hypertensionstage 1"


def test_render_index_fills_last_reading():
    html = render_index(
        {
            **STATS,
            "last_reading": {
                "id": 3,
                "timestamp": "2026-05-04T07:08:09",
                "systolic": 119,
                "diastolic": 78,
                "pulse": 66,
                "classification": "Normal",
            },
        }
    )
    document = parse_document(html)
    panel = document.select_one(".last-reading")
    assert "hidden" not in get_classes(panel)
    assert panel.select_one(".last-reading-time").get_text() == "2026-05-04 07:08"
    assert panel.select_one(".last-reading-pressure").get_text() == "119/78 mmHg"
    assert len(document.select(".stat-card")) == 3
