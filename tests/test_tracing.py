import unittest

from snowflake_gateway.app.services.settings import Settings
from snowflake_gateway.app.services.snowflake import SnowflakeGenerator
from snowflake_gateway.app.services.tracing import TracingService

EPOCH = 1420070400000
TIMESTAMP = 1451222400000


class RecordingSpan:
    def __init__(self):
        self.attributes = {}

    def set_attribute(self, key, value):
        self.attributes[key] = value


class TestTracingService(unittest.TestCase):
    def test_record_generated_sets_layout_fields(self):
        generator = SnowflakeGenerator(epoch=EPOCH, increment=7)
        deconstructed = generator.deconstruct(generator.generate(TIMESTAMP))
        span = RecordingSpan()
        TracingService(Settings()).record_generated(span, deconstructed)
        self.assertEqual(span.attributes["snowflake.id"], deconstructed.snowflake)
        self.assertEqual(span.attributes["snowflake.epoch"], EPOCH)
        self.assertEqual(span.attributes["snowflake.delta"], TIMESTAMP - EPOCH)
        self.assertEqual(span.attributes["snowflake.increment"], 7)
        self.assertEqual(span.attributes["snowflake.worker_id"], 1)
        self.assertEqual(span.attributes["snowflake.process_id"], 0)

    def test_disabled_service_never_records(self):
        tracing = TracingService(Settings(TRACING_STRATEGY="none"))
        tracing.init_tracing()
        self.assertFalse(tracing.enabled)
        self.assertFalse(tracing.should_record(True))

    def test_uninitialised_service_never_records(self):
        tracing = TracingService(Settings(TRACING_STRATEGY="always", TRACING_EXPORTER="console"))
        self.assertFalse(tracing.should_record(True))

    def test_sampling_bounds(self):
        self.assertFalse(TracingService(Settings(TRACING_SAMPLE_RATE=0.0)).should_sample())
        self.assertTrue(TracingService(Settings(TRACING_SAMPLE_RATE=1.0)).should_sample())

    def test_extract_context_without_traceparent(self):
        self.assertIsNone(TracingService(Settings()).extract_context(""))


if __name__ == "__main__":
    unittest.main()
