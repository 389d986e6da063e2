import threading
import time
import unittest
from unittest.mock import patch

from downtime_detector.checks.results import CheckResult
from downtime_detector.models import ServiceSpec
from downtime_detector.runner import refresh_all, refresh_one
from downtime_detector.services import ServiceRegistry
from downtime_detector.store import MemoryServiceStore


def _registry_with(*names: str) -> ServiceRegistry:
    registry = ServiceRegistry(MemoryServiceStore())
    for name in names:
        registry.add(
            ServiceSpec(
                name=name,
                mode="markup-page",
                url=f"http://{name}.example.local/",
                selector="#status",
            )
        )
    return registry


class RefreshAllTests(unittest.TestCase):
    def test_sequential_refresh_records_each_result(self) -> None:
        registry = _registry_with("alpha", "beta")
        results = {
            "http://alpha.example.local/": CheckResult.up("Operational"),
            "http://beta.example.local/": CheckResult.down(error="element not found"),
        }
        seen_order = []

        def fake_check(service):
            seen_order.append(service.name)
            return results[service.url]

        with patch("downtime_detector.runner.check_service", side_effect=fake_check):
            with self.assertLogs("downtime_detector.runner", level="WARNING") as logs:
                outcomes = refresh_all(registry)

        self.assertEqual(seen_order, ["alpha", "beta"])
        self.assertEqual([o.service.status for o in outcomes], ["up", "down"])
        self.assertIsNone(outcomes[0].notice)
        self.assertEqual(outcomes[1].notice, "Error checking beta: element not found")
        self.assertIn("Error checking beta", logs.output[0])
        self.assertEqual([s.status for s in registry.list_services()], ["up", "down"])

    def test_services_are_unknown_while_refreshing(self) -> None:
        registry = _registry_with("alpha")
        observed = []

        def fake_check(service):
            observed.append(registry.get(service.id).status)
            return CheckResult.up("ok")

        registry.record_result(registry.list_services()[0].id, CheckResult.down())
        with patch("downtime_detector.runner.check_service", side_effect=fake_check):
            refresh_all(registry)

        self.assertEqual(observed, ["unknown"])

    def test_concurrent_refresh_keeps_submission_order(self) -> None:
        registry = _registry_with("slow", "fast", "medium")
        delays = {"slow": 0.05, "fast": 0.0, "medium": 0.02}
        threads = set()

        def fake_check(service):
            threads.add(threading.get_ident())
            time.sleep(delays[service.name])
            return CheckResult.up(service.name)

        with patch("downtime_detector.runner.check_service", side_effect=fake_check):
            outcomes = refresh_all(registry, concurrency=3)

        self.assertEqual([o.result.value for o in outcomes], ["slow", "fast", "medium"])
        self.assertTrue(all(o.service.status == "up" for o in outcomes))
        self.assertGreaterEqual(len(threads), 1)

    def test_empty_registry(self) -> None:
        self.assertEqual(refresh_all(ServiceRegistry(MemoryServiceStore())), [])


class RefreshOneTests(unittest.TestCase):
    def test_unknown_service(self) -> None:
        self.assertIsNone(refresh_one(ServiceRegistry(MemoryServiceStore()), "missing"))

    def test_checks_single_service(self) -> None:
        registry = _registry_with("alpha", "beta")
        target = registry.list_services()[1]

        with patch(
            "downtime_detector.runner.check_service",
            return_value=CheckResult.down(value="Major outage"),
        ) as check:
            with self.assertLogs("downtime_detector.runner", level="WARNING"):
                outcome = refresh_one(registry, target.id)

        check.assert_called_once()
        self.assertEqual(outcome.service.status, "down")
        self.assertEqual(outcome.notice, "beta is down (got 'Major outage')")
        self.assertEqual(registry.list_services()[0].status, "unknown")


if __name__ == "__main__":
    unittest.main()
