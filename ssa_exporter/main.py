#!/usr/bin/env python3

# -----------------------------------------------------------------------------
# Copyright (c) 2025 SSA Exporter contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Entry point for the Smart Storage Array exporter.

Polls ssacli on a fixed interval and serves the latest controller and
logical drive state on a Prometheus /metrics endpoint.
"""


import argparse
import logging
import os
import signal
import sys

from ssa_exporter.collectors.array_collector import ArrayCollector
from ssa_exporter.command import CommandRunner
from ssa_exporter.config import Settings
from ssa_exporter.exceptions import ConfigurationError
from ssa_exporter.scheduler import CollectionScheduler
from ssa_exporter.writer.metrics_store import MetricsStore
from ssa_exporter.writer.prometheus_writer import PrometheusServer

FORMAT = '%(asctime)s - %(levelname)s - %(funcName)s - %(lineno)d - %(message)s'
DATEFMT = '%Y-%m-%dT%H:%M:%SZ'


def build_parser():
    parser = argparse.ArgumentParser(description="Export HPE Smart Storage Array controller metrics to Prometheus")
    parser.add_argument('--config', type=str, default=None,
        help='Path to YAML config file. If not used, settings come from environment variables and .env.')
    parser.add_argument('--ssacliPath', type=str, default=None,
        help='Name or path of the ssacli executable (overrides config file and .env if set).')
    parser.add_argument('--commandTimeout', type=float, default=None,
        help='Seconds to wait for each ssacli call. Default: wait until it exits.')
    parser.add_argument('--listenAddress', type=str, default=None,
        help='Address for the Prometheus metrics server to bind to (default: 0.0.0.0).')
    parser.add_argument('--port', type=int, default=None,
        help='Port for the Prometheus metrics server (default: 9101).')
    parser.add_argument('--intervalTime', type=float, default=None,
        help='Seconds to wait between collection cycles (default: 5).')
    parser.add_argument('--maxIterations', type=int, default=None,
        help='Maximum number of collection iterations to run before exiting. Default: 0 (run indefinitely).')
    parser.add_argument('--pruneStale', action='store_true', default=None,
        help='Remove metrics of logical drives and controllers that are no longer reported.')
    parser.add_argument('--logfile', type=str, default=None,
        help='Path to log file. If not provided, logs to console only.')
    parser.add_argument('--loglevel', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], default='INFO',
        help='Log level for both console and file output. Default: INFO')
    return parser


def configure_logging(loglevel='INFO', logfile=None):
    log_level = getattr(logging, loglevel.upper())

    # Check logfile path before configuring file logging
    if logfile:
        logfile_dir = os.path.dirname(logfile) if os.path.dirname(logfile) else '.'
        if os.path.exists(logfile_dir) and os.access(logfile_dir, os.W_OK):
            try:
                logging.basicConfig(filename=logfile, level=log_level,
                                    format=FORMAT, datefmt=DATEFMT)
                logging.info('Logging to file: ' + logfile)
            except (OSError, IOError) as e:
                # Fallback to console logging if file logging fails
                logging.basicConfig(level=log_level, format=FORMAT, datefmt=DATEFMT)
                logging.error(f'Failed to configure file logging to {logfile}: {e}')
                logging.warning('Falling back to console logging only')
        else:
            # Directory doesn't exist or isn't writable
            logging.basicConfig(level=log_level, format=FORMAT, datefmt=DATEFMT)
            logging.error(f'Logfile directory {logfile_dir} does not exist or is not writable')
            logging.warning('Falling back to console logging only')
    else:
        logging.basicConfig(level=log_level, format=FORMAT, datefmt=DATEFMT)


def load_settings(cmd):
    """Settings from the config file or environment, with command line overrides applied."""
    if cmd.config is not None:
        settings = Settings(config_file=cmd.config, from_env=False)
    else:
        settings = Settings(from_env=True)

    if cmd.ssacliPath is not None:
        settings.ssacli_path = cmd.ssacliPath
    if cmd.commandTimeout is not None:
        settings.command_timeout = cmd.commandTimeout
    if cmd.listenAddress is not None:
        settings.listen_address = cmd.listenAddress
    if cmd.port is not None:
        settings.listen_port = cmd.port
    if cmd.intervalTime is not None:
        settings.interval_time = cmd.intervalTime
    if cmd.maxIterations is not None:
        settings.max_iterations = cmd.maxIterations
    if cmd.pruneStale:
        settings.prune_stale = True

    settings.validate()
    return settings


def main(argv=None):
    CMD = build_parser().parse_args(argv)
    configure_logging(CMD.loglevel, CMD.logfile)

    # Initialize main logger after configuration
    LOG = logging.getLogger(__name__)

    try:
        settings = load_settings(CMD)
    except ConfigurationError as e:
        LOG.error(f"Invalid configuration: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    runner = CommandRunner(executable=settings.ssacli_path, timeout=settings.command_timeout)
    store = MetricsStore()
    collector = ArrayCollector(runner, store, prune_stale=settings.prune_stale)
    scheduler = CollectionScheduler(collector, interval=settings.interval_time,
                                    max_iterations=settings.max_iterations)
    server = PrometheusServer(store, port=settings.listen_port, addr=settings.listen_address)

    def handle_sigterm(signum, frame):
        LOG.info("Received SIGTERM, stopping after the current collection")
        scheduler.stop()

    signal.signal(signal.SIGTERM, handle_sigterm)

    try:
        server.start()
    except OSError as e:
        print(f"Error: cannot listen on {settings.listen_address}:{settings.listen_port}: {e}", file=sys.stderr)
        return 1

    try:
        scheduler.run()
    except KeyboardInterrupt:
        LOG.info("Interrupted by user. Exiting gracefully.")
        scheduler.stop()
    finally:
        server.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
