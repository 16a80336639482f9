import unittest

from core.app_context import AppContext
from core.config_loader import AppConfig
from core.usage.recorder import InMemoryUsageRecorder
from database.usage_recorder import SqlUsageRecorder


class TestAppContext(unittest.TestCase):

    def _config(self, **overrides):
        data = {
            "database": {"url": "sqlite://"},
            "reasoning": {"api_key": "test-key", "request_timeout_seconds": 12},
            "quota": {"limits": {"job_analysis": 4}, "window_seconds": 600},
        }
        data.update(overrides)
        return AppConfig(**data)

    def test_build_wires_shared_quota_tracker(self):
        context = AppContext.build(self._config())
        try:
            self.assertIs(context.orchestrator.quota_tracker, context.quota_tracker)
            self.assertEqual(context.quota_tracker.limits["job_analysis"], 4)
            self.assertEqual(context.quota_tracker.window_seconds, 600)
            self.assertIsInstance(context.usage_recorder, SqlUsageRecorder)
            self.assertIs(context.orchestrator.adjustment_client.provider, context.reasoning_service)
            self.assertEqual(context.reasoning_service.max_attempts, 2)
            self.assertEqual(context.orchestrator.adjustment_client.window_seconds, 600)
        finally:
            context.engine.dispose()

    def test_disabled_usage_logging_keeps_entries_in_memory(self):
        context = AppContext.build(self._config(usage={"enabled": False}))
        try:
            self.assertIsInstance(context.usage_recorder, InMemoryUsageRecorder)
        finally:
            context.engine.dispose()

    def test_missing_api_key_raises(self):
        with self.assertRaises(ValueError):
            AppContext.build(self._config(reasoning={}))
