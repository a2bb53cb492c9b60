"""
Prometheus exporter for HPE Smart Storage Array controllers.

The exporter follows a small pipeline:
- command: run the ssacli management tool
- parser / normalize: turn its text output into typed records and metric values
- collectors: orchestrate one poll cycle across all discovered controllers
- writer: hold the latest values and expose them to Prometheus scrapes
"""

__version__ = "0.1.0"
