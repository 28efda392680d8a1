"""Report sinks and renderers for expectation summaries."""

from expectly.reporting.junit import JUnitSink, generate_report, read_counts, write_junit

__all__ = ["JUnitSink", "generate_report", "read_counts", "write_junit"]
