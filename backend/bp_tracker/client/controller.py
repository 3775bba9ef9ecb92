"""
Form submission controller for the tracker page.

One submit: serialize the form, POST it as JSON, then render the classification
(or error) and patch the stat cards. Failures never propagate to the caller;
they end up in the result panel.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import httpx
from bs4 import BeautifulSoup

from bp_tracker.client.form import collect_form_data, reset_form, snapshot_defaults
from bp_tracker.web.page import (
    FORM_SELECTOR,
    PageStructureError,
    RESULT_SELECTOR,
    SUBMIT_BUTTON_SELECTOR,
    display_result,
    require,
    update_stats_display,
)

logger = logging.getLogger(__name__)

SUBMIT_URL = "/submit"
SUBMIT_LABEL = "Save Readings"
SUBMITTING_LABEL = "Saving..."
GENERIC_ERROR = "Error submitting readings. Please try again."


class SubmitState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    DONE = "done"


@dataclass
class SubmitOutcome:
    state: SubmitState
    ok: bool
    result: dict | None = None
    status_code: int | None = None


class FormController:
    """Owns one page document and submits its reading form through the given HTTP client."""

    def __init__(self, document: BeautifulSoup, http_client: httpx.AsyncClient, submit_url: str = SUBMIT_URL):
        self.document = document
        self.http_client = http_client
        self.submit_url = submit_url
        self.form = require(document, FORM_SELECTOR)
        self.submit_button = require(self.form, SUBMIT_BUTTON_SELECTOR)
        self.result_panel = require(document, RESULT_SELECTOR)
        self._defaults = snapshot_defaults(self.form)
        self.state = SubmitState.IDLE

    def render_state(self, state: SubmitState) -> None:
        self.state = state
        if state is SubmitState.SUBMITTING:
            self.submit_button["disabled"] = "disabled"
            self.submit_button.string = SUBMITTING_LABEL
            return
        if self.submit_button.has_attr("disabled"):
            del self.submit_button["disabled"]
        self.submit_button.string = SUBMIT_LABEL

    async def submit(self) -> SubmitOutcome:
        if self.state is SubmitState.SUBMITTING:
            logger.warning("Submit ignored: a submission is already in flight")
            return SubmitOutcome(state=SubmitState.SUBMITTING, ok=False)

        self.render_state(SubmitState.SUBMITTING)
        try:
            data = collect_form_data(self.form)
            response = await self.http_client.post(
                self.submit_url,
                json=data,
                headers={"Content-Type": "application/json"},
            )
            result = response.json()
            if response.is_success:
                display_result(self.document, result, is_error=False)
                update_stats_display(self.document, result.get("stats"))
                reset_form(self.form, self._defaults)
            else:
                logger.info("Submit rejected (%s): %s", response.status_code, result.get("error"))
                display_result(self.document, result, is_error=True)
            outcome = SubmitOutcome(
                state=SubmitState.DONE,
                ok=response.is_success,
                result=result,
                status_code=response.status_code,
            )
        except (httpx.HTTPError, PageStructureError, ValueError, KeyError, TypeError, AttributeError):
            logger.exception("Error submitting readings")
            display_result(self.document, {"error": GENERIC_ERROR}, is_error=True)
            outcome = SubmitOutcome(state=SubmitState.DONE, ok=False)
        finally:
            self.render_state(SubmitState.DONE)
        return outcome
