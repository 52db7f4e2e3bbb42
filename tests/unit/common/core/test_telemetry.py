import logging

from opentelemetry import trace

from stripekit.common.core.telemetry import TraceContextFilter, get_logger, trace_span


def _record() -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)


class TestTraceContextFilter:
    def test_outside_span(self):
        record = _record()
        TraceContextFilter().filter(record)
        assert record.trace_id == "-"

    def test_inside_span(self):
        get_logger(__name__)

        @trace_span(name="stripekit.test")
        def inside():
            record = _record()
            TraceContextFilter().filter(record)
            return record, trace.get_current_span().get_span_context().trace_id

        record, trace_id = inside()

        assert record.trace_id == format(trace_id, "032x")


class TestTraceSpan:
    def test_preserves_return_value_and_name(self):
        @trace_span
        def compute(x):
            return x * 2

        assert compute(21) == 42
        assert compute.__name__ == "compute"

    async def test_async(self):
        class Worker:
            @trace_span
            async def run(self):
                return "done"

        assert await Worker().run() == "done"
