from __future__ import annotations

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from downtime_detector.checks.http_fetch import fetch
from downtime_detector.checks.results import CheckResult


def select_text(html: str | bytes, selector: str | None) -> str | None:
    """Trimmed text of the first element matching ``selector``, or None."""
    if not selector or not selector.strip():
        return None
    soup = BeautifulSoup(html, "html.parser")
    element = soup.select_one(selector)
    if element is None:
        return None
    return element.get_text().strip()


def run_page(
    url: str,
    selector: str | None,
    expected_value: str | None,
    timeout_s: float,
    connect_timeout_s: float | None = None,
) -> CheckResult:
    res = fetch(url, timeout_s=timeout_s, connect_timeout_s=connect_timeout_s)
    if res.response is None:
        return CheckResult.down(error=f"request failed: {res.error}")
    if not res.ok:
        return CheckResult.down(error=f"page request failed with status {res.status_code}")

    try:
        text = select_text(res.response.content, selector)
    except SelectorSyntaxError as exc:
        return CheckResult.unknown(error=f"invalid selector: {exc}")

    if text is None:
        return CheckResult.down(error="element not found")

    if expected_value:
        is_up = text.lower() == expected_value.lower()
        return CheckResult.up(text) if is_up else CheckResult.down(value=text)

    # A matched element proves the page is up even when it has no text.
    return CheckResult.up(text)
