"""
Prometheus exposition for the Smart Storage Array exporter.
"""

import logging
import threading
from typing import Optional

from prometheus_client import CollectorRegistry, generate_latest, start_http_server

from ssa_exporter.writer.metrics_store import MetricsStore

# Initialize logger
LOG = logging.getLogger(__name__)

DEFAULT_PORT = 9101

class PrometheusServer:
    """
    Serves the contents of a MetricsStore for Prometheus scraping.
    Scrapes are answered by prometheus_client's threaded HTTP server and only
    ever read from the store.
    """

    def __init__(self, store: MetricsStore, port: int = DEFAULT_PORT, addr: str = '0.0.0.0',
                 registry: Optional[CollectorRegistry] = None):
        """
        Initialize the Prometheus server.

        Args:
            store: Metrics store to expose
            port: Port to serve Prometheus metrics on (default: 9101)
            addr: Address to bind to
            registry: Registry to register the store in; a private one is
                created when omitted, so no process or platform metrics are exposed
        """
        self.store = store
        self.port = port
        self.addr = addr
        self.server_started = False
        self.server_lock = threading.Lock()
        self._server = None
        self._thread = None

        # Create custom registry to avoid conflicts with default registry
        self.prometheus_registry = registry if registry is not None else CollectorRegistry()
        self.prometheus_registry.register(store)

        LOG.info(f"PrometheusServer initialized, will serve metrics on {addr}:{port}")

    def start(self) -> None:
        """Start the Prometheus HTTP server if not already started."""
        with self.server_lock:
            if self.server_started:
                return
            try:
                self._server, self._thread = start_http_server(
                    self.port, addr=self.addr, registry=self.prometheus_registry)
            except Exception as e:
                LOG.error(f"Failed to start Prometheus server on port {self.port}: {e}")
                raise
            self.server_started = True
            LOG.info(f"Prometheus metrics server started on {self.addr}:{self.port}")

    def render(self) -> bytes:
        """Current exposition text, identical to what a scrape of /metrics returns."""
        return generate_latest(self.prometheus_registry)

    def close(self) -> None:
        """Stop the HTTP server if this instance started one."""
        with self.server_lock:
            if self._server is not None:
                self._server.shutdown()
                self._server.server_close()
                self._server = None
                LOG.info("Prometheus metrics server stopped")
            self.server_started = False
