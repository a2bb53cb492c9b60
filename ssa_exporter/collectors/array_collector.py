import logging
from dataclasses import dataclass, field
from typing import List

from ssa_exporter.command import CommandRunner
from ssa_exporter.exceptions import CommandError
from ssa_exporter.normalize import normalize_record
from ssa_exporter.parser import parse_controller_slots, parse_logical_drives
from ssa_exporter.writer.base import MetricsSink


def _decode(output: bytes) -> str:
    return output.decode('utf-8', errors='replace')


@dataclass
class CollectionResult:
    """Summary of one poll cycle, used for logging and tests."""
    discovered: bool = False
    controller_count: int = 0
    slots: List[int] = field(default_factory=list)
    failed_slots: List[int] = field(default_factory=list)
    drives_written: int = 0
    drives_skipped: int = 0
    entries_pruned: int = 0


class ArrayCollector:
    """Collects controller and logical drive state from ssacli into a metrics sink"""

    def __init__(self, runner: CommandRunner, sink: MetricsSink, prune_stale: bool = False):
        self.runner = runner
        self.sink = sink
        self.prune_stale = prune_stale
        self.logger = logging.getLogger(__name__)

    def collect(self) -> CollectionResult:
        """Run one poll cycle. Invocation failures are logged, never raised."""
        result = CollectionResult()

        try:
            listing = self.runner.list_controllers()
        except CommandError as e:
            self.logger.error(f"Error listing controllers: {e}")
            return result

        scan = parse_controller_slots(_decode(listing))
        self.sink.set_controller_count(scan.match_count)
        result.discovered = True
        result.controller_count = scan.match_count
        result.slots = list(scan.slots)
        self.logger.debug(f"Discovered {scan.match_count} controller(s), slots {scan.slots}")

        for slot in scan.slots:
            if not self.collect_logical_drives(slot, result):
                result.failed_slots.append(slot)

        if self.prune_stale:
            result.entries_pruned += self.sink.retain_slots(scan.slots)

        self.logger.info(
            f"Collected {result.drives_written} logical drive(s) from {len(scan.slots)} controller(s)"
            + (f", {len(result.failed_slots)} controller(s) failed" if result.failed_slots else ""))
        return result

    def collect_logical_drives(self, slot: int, result: CollectionResult) -> bool:
        """Collect logical drives of one controller. Returns False if the command failed."""
        try:
            output = self.runner.show_logical_drives(slot)
        except CommandError as e:
            self.logger.error(f"Error getting logical drives for controller slot {slot}: {e}")
            return False

        records = parse_logical_drives(_decode(output))
        if not records:
            self.logger.debug(f"No logical drives found for controller slot {slot}")

        seen = []
        for record in records:
            sample = normalize_record(record)
            if sample is None:
                self.logger.warning(
                    f"Skipping logical drive {record.number} on slot {slot}: "
                    f"unparseable capacity '{record.capacity_raw}'")
                result.drives_skipped += 1
                continue

            self.sink.set_drive_metrics(
                slot, record.number, sample.status, sample.capacity_mb, sample.raid_level)
            seen.append(record.number)
            result.drives_written += 1
            self.logger.debug(
                f"Slot {slot} logicaldrive {record.number}: status={sample.status} "
                f"capacity_mb={sample.capacity_mb} raid={sample.raid_level}")

        if self.prune_stale:
            result.entries_pruned += self.sink.prune(slot, seen)
        return True
