from ssa_exporter.writer.base import MetricsSink
from ssa_exporter.writer.metrics_store import MetricsStore
from ssa_exporter.writer.prometheus_writer import PrometheusServer

__all__ = ['MetricsSink', 'MetricsStore', 'PrometheusServer']
