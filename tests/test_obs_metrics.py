"""Tests for arbor_common.observability.metrics submodule.

Metric names are unique per test so the default registry can be shared
with the service collectors.
"""

import unittest

from prometheus_client import REGISTRY

from arbor_common.observability.metrics import (
    create_counter,
    create_gauge,
    create_histogram,
    create_info,
    create_service_info,
    metrics_response,
)
from arbor_common.observability.testing import reset_metrics


class TestMetricFactories(unittest.TestCase):
    """Verify create_* functions and idempotent registration."""

    def test_create_counter_basic(self):
        c = create_counter("test_counter_basic", "A test counter")
        before = c._value.get()
        c.inc()
        self.assertEqual(c._value.get() - before, 1.0)

    def test_create_counter_idempotent(self):
        c1 = create_counter("test_counter_idem", "counter")
        c2 = create_counter("test_counter_idem", "counter")
        self.assertIs(c1, c2)

    def test_create_counter_idempotent_with_total_suffix(self):
        c1 = create_counter("test_counter_suffix_total", "counter")
        c2 = create_counter("test_counter_suffix_total", "counter")
        self.assertIs(c1, c2)

    def test_create_histogram_with_buckets(self):
        h = create_histogram(
            "test_hist_buckets", "A test histogram", buckets=[0.1, 0.5, 1.0]
        )
        h.observe(0.3)
        self.assertEqual(tuple(h._upper_bounds), (0.1, 0.5, 1.0, float("inf")))
        self.assertGreater(h._sum.get(), 0)

    def test_create_histogram_idempotent(self):
        h1 = create_histogram("test_hist_idem", "hist")
        h2 = create_histogram("test_hist_idem", "hist")
        self.assertIs(h1, h2)

    def test_create_labelled_gauge(self):
        g = create_gauge("test_gauge_labels", "A labelled gauge", ["region"])
        g.labels(region="eu").set(3)
        self.assertEqual(g.labels(region="eu")._value.get(), 3.0)

    def test_create_gauge(self):
        g = create_gauge("test_gauge_basic", "A test gauge")
        g.set(42)
        self.assertEqual(g._value.get(), 42.0)

    def test_create_info(self):
        info = create_info("test_info_metric", "info")
        info.info({"version": "1.0"})
        self.assertIsNotNone(info)


class TestCreateServiceInfo(unittest.TestCase):
    """Verify the create_service_info convenience helper."""

    def test_creates_and_populates(self):
        info = create_service_info("test_svc", "1.2.3", "staging")
        samples = list(info.collect()[0].samples)
        versions = [s.labels.get("version") for s in samples]
        envs = [s.labels.get("environment") for s in samples]
        self.assertIn("1.2.3", versions)
        self.assertIn("staging", envs)

    def test_defaults_environment(self):
        info = create_service_info("test_svc_default", "0.0.1")
        samples = list(info.collect()[0].samples)
        env_values = [s.labels.get("environment") for s in samples]
        self.assertIn("development", env_values)


class TestMetricsResponse(unittest.TestCase):
    """Verify the metrics_response helper."""

    def test_returns_bytes_and_content_type(self):
        create_counter("test_exposed_counter", "exposed").inc()

        body, content_type = metrics_response()
        self.assertIsInstance(body, bytes)
        self.assertIn("text/plain", content_type)
        self.assertIn(b"test_exposed_counter_total", body)


class TestResetMetrics(unittest.TestCase):
    """reset_metrics unregisters user collectors only."""

    def setUp(self):
        self._saved = {
            c for c in REGISTRY._names_to_collectors.values() if hasattr(c, "_name")
        }

    def tearDown(self):
        # Put the service collectors back for the rest of the session
        reset_metrics()
        for collector in self._saved:
            REGISTRY.register(collector)

    def test_removes_user_collectors(self):
        create_counter("test_reset_counter", "to be removed")
        reset_metrics()
        names = REGISTRY._names_to_collectors
        self.assertNotIn("test_reset_counter_total", names)
        self.assertFalse(any(hasattr(c, "_name") for c in names.values()))

    def test_name_can_be_reused_after_reset(self):
        c1 = create_counter("test_reset_reuse", "first")
        reset_metrics()
        c2 = create_counter("test_reset_reuse", "second")
        self.assertIsNot(c1, c2)


if __name__ == "__main__":
    unittest.main()
