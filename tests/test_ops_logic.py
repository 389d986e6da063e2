import unittest
from datetime import datetime, timedelta, timezone

from downtime_detector.checks.results import CheckResult
from downtime_detector.formatting import format_result_notice
from downtime_detector.models import Service
from downtime_detector.ops_logic import serialize_ts, summarize_services


def _service(service_id: str, status: str) -> Service:
    return Service(
        id=service_id,
        name=f"svc-{service_id}",
        mode="markup-page",
        url="http://example.local/",
        selector="h1",
        status=status,
    )


class OpsLogicTests(unittest.TestCase):
    def test_summarize_services(self) -> None:
        summary = summarize_services(
            [_service("a", "up"), _service("b", "down"), _service("c", "unknown"), _service("d", "down")]
        )
        self.assertEqual(
            summary,
            {"total": 4, "up": 1, "down": 2, "unknown": 1, "down_list": ["b", "d"]},
        )

    def test_serialize_ts_uses_utc_z_suffix(self) -> None:
        ts = datetime(2026, 10, 17, 10, 0, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(serialize_ts(ts), "2026-10-17T08:00:00Z")
        self.assertIsNone(serialize_ts(None))


class FormattingTests(unittest.TestCase):
    def test_notices(self) -> None:
        svc = _service("a", "unknown")
        cases = [
            (CheckResult.up("ok"), None),
            (CheckResult.down(error="element not found"), "Error checking svc-a: element not found"),
            (CheckResult.down(value={}), "svc-a is down (got {})"),
            (CheckResult.down(), "svc-a is down"),
            (CheckResult.unknown(error="boom"), "Error checking svc-a: boom"),
        ]
        for result, expected in cases:
            with self.subTest(result=result):
                self.assertEqual(format_result_notice(svc, result), expected)


if __name__ == "__main__":
    unittest.main()
