# -----------------------------------------------------------------------------
# Copyright (c) 2025 SSA Exporter contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
In-memory store of the latest controller and logical drive values.

The store is written by the collection thread and read by scrape threads.
Each drive's (status, capacity, raid) values are kept as one immutable
DriveSample and swapped under a lock, so a scrape sees either the old or the
new triple for a key, never a mix of both.
"""

import logging
import threading
from typing import Dict, Iterable, Iterator, Optional, Tuple

from prometheus_client.core import GaugeMetricFamily

from ssa_exporter.normalize import DriveSample
from ssa_exporter.writer.base import MetricsSink

LOG = logging.getLogger(__name__)

LABELS = ['controller_slot', 'logical_device_number']

DriveKey = Tuple[int, int]


class MetricsStore(MetricsSink):
    """
    Thread-safe holder of exporter metrics, registered as a custom collector
    in a prometheus_client CollectorRegistry.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._controller_count = 0
        self._drives: Dict[DriveKey, DriveSample] = {}

    def set_controller_count(self, count: int) -> None:
        with self._lock:
            self._controller_count = count

    def set_drive_metrics(self, slot: int, number: int, status: int,
                          capacity_mb: int, raid_level: int) -> None:
        sample = DriveSample(status=status, capacity_mb=capacity_mb, raid_level=raid_level)
        with self._lock:
            self._drives[(slot, number)] = sample

    @property
    def controller_count(self) -> int:
        with self._lock:
            return self._controller_count

    def get(self, slot: int, number: int) -> Optional[DriveSample]:
        """Latest sample for one logical drive, or None if never seen."""
        with self._lock:
            return self._drives.get((slot, number))

    def snapshot(self) -> Tuple[int, Dict[DriveKey, DriveSample]]:
        """Consistent copy of the controller count and all drive samples."""
        with self._lock:
            return self._controller_count, dict(self._drives)

    def remove(self, slot: int, number: int) -> bool:
        """Drop one logical drive. Returns True if it was present."""
        with self._lock:
            return self._drives.pop((slot, number), None) is not None

    def prune(self, slot: int, keep_numbers: Iterable[int]) -> int:
        keep = set(keep_numbers)
        with self._lock:
            stale = [key for key in self._drives if key[0] == slot and key[1] not in keep]
            for key in stale:
                del self._drives[key]
        if stale:
            LOG.info(f"Removed {len(stale)} stale logical drive(s) from controller slot {slot}")
        return len(stale)

    def retain_slots(self, slots: Iterable[int]) -> int:
        keep = set(slots)
        with self._lock:
            stale = [key for key in self._drives if key[0] not in keep]
            for key in stale:
                del self._drives[key]
        if stale:
            LOG.info(f"Removed {len(stale)} logical drive(s) of controllers no longer present")
        return len(stale)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        """Build metric families from a snapshot; called by the registry on each scrape."""
        controller_count, drives = self.snapshot()

        num_controllers = GaugeMetricFamily(
            'num_controllers', 'Number of smart storage array controllers.',
            value=controller_count)
        status = GaugeMetricFamily(
            'logical_device_status', 'Status of logical device. 0 = OK', labels=LABELS)
        capacity = GaugeMetricFamily(
            'logical_device_capacity', 'Capacity of logical device in MB', labels=LABELS)
        raid = GaugeMetricFamily(
            'logical_device_raid', 'RAID level of logical device', labels=LABELS)

        for (slot, number), sample in sorted(drives.items()):
            label_values = [str(slot), str(number)]
            status.add_metric(label_values, sample.status)
            capacity.add_metric(label_values, sample.capacity_mb)
            raid.add_metric(label_values, sample.raid_level)

        yield num_controllers
        yield status
        yield capacity
        yield raid

    def describe(self) -> Iterator[GaugeMetricFamily]:
        """Static metric descriptions so registration does not trigger a collect."""
        yield GaugeMetricFamily('num_controllers', 'Number of smart storage array controllers.')
        yield GaugeMetricFamily('logical_device_status', 'Status of logical device. 0 = OK', labels=LABELS)
        yield GaugeMetricFamily('logical_device_capacity', 'Capacity of logical device in MB', labels=LABELS)
        yield GaugeMetricFamily('logical_device_raid', 'RAID level of logical device', labels=LABELS)
