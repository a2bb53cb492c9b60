# -----------------------------------------------------------------------------
# Copyright (c) 2025 SSA Exporter contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Parsers for ssacli text output.

Both entry points are pure: they take the decoded command output and return
typed records, never touching the process boundary or the metrics store.
Output that does not match the expected patterns yields empty results.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

LOG = logging.getLogger(__name__)

# ssacli reports slot and drive numbers as signed 64-bit integers
MAX_INT64 = 2 ** 63 - 1

CONTROLLER_SLOT_RE = re.compile(r'Slot (\d+)')
LOGICAL_DRIVE_RE = re.compile(r'logicaldrive (\d+) \((.*B), RAID (.*), (.*)\)')


@dataclass(frozen=True)
class LogicalDriveRecord:
    """One logical drive line from `ssacli ctrl slot=N ld all show`."""
    number: int
    capacity_raw: str
    raid_level_raw: str
    status_raw: str


@dataclass
class ControllerScan:
    """
    Result of controller discovery.

    match_count counts every "Slot <n>" occurrence, including ones whose
    number could not be converted; slots only holds the valid ones.
    """
    slots: List[int] = field(default_factory=list)
    match_count: int = 0


def _to_int(token: str) -> Optional[int]:
    """Convert a captured digit run, rejecting values outside the int64 range."""
    try:
        value = int(token)
    except ValueError:
        return None
    if value > MAX_INT64:
        return None
    return value


def parse_controller_slots(text: str) -> ControllerScan:
    """
    Extract controller slot numbers from `ssacli ctrl all show` output.

    Slots are returned in textual order; a slot mentioned twice is reported twice.
    """
    scan = ControllerScan()
    for match in CONTROLLER_SLOT_RE.finditer(text):
        scan.match_count += 1
        slot = _to_int(match.group(1))
        if slot is None:
            LOG.debug(f"Skipping unparseable controller slot '{match.group(1)}'")
            continue
        scan.slots.append(slot)
    return scan


def iter_logical_drives(text: str) -> Iterator[LogicalDriveRecord]:
    """Lazily yield logical drive records in the order they appear."""
    for match in LOGICAL_DRIVE_RE.finditer(text):
        number = _to_int(match.group(1))
        if number is None:
            LOG.debug(f"Skipping logical drive with unparseable number '{match.group(1)}'")
            continue
        yield LogicalDriveRecord(
            number=number,
            capacity_raw=match.group(2),
            raid_level_raw=match.group(3),
            status_raw=match.group(4),
        )


def parse_logical_drives(text: str) -> List[LogicalDriveRecord]:
    """Extract all logical drive records from `ssacli ctrl slot=N ld all show` output."""
    return list(iter_logical_drives(text))
