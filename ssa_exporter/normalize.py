# -----------------------------------------------------------------------------
# Copyright (c) 2025 SSA Exporter contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Conversion of raw ssacli fields into numeric metric values.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from ssa_exporter.parser import LogicalDriveRecord

CAPACITY_PARSE_FAILED = -1
RAID_LEVEL_UNKNOWN = -1

STATUS_OK = 0
STATUS_NOT_OK = 1

# Multipliers to megabytes, keyed by the first letter of the unit suffix
UNIT_TO_MB = {
    'T': 1024 * 1024,
    'G': 1024,
    'M': 1,
}

RAID_LEVEL_RE = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class DriveSample:
    """Normalized metric values for one logical drive."""
    status: int
    capacity_mb: int
    raid_level: int


def parse_capacity(value: str) -> int:
    """
    Convert a capacity such as "279.4 GB" to whole megabytes.

    Unknown unit prefixes are treated as megabytes. Returns
    CAPACITY_PARSE_FAILED when there is no space separator or the
    magnitude is not a finite decimal number.
    """
    magnitude, sep, suffix = value.partition(' ')
    if not sep:
        return CAPACITY_PARSE_FAILED
    try:
        number = float(magnitude)
    except ValueError:
        return CAPACITY_PARSE_FAILED
    if not math.isfinite(number):
        return CAPACITY_PARSE_FAILED

    multiplier = UNIT_TO_MB.get(suffix[:1], 1)
    return int(number * multiplier)


def parse_status(value: str) -> int:
    """Map "OK" to 0 and every other status label to 1."""
    return STATUS_OK if value == "OK" else STATUS_NOT_OK


def parse_raid_level(value: str) -> int:
    """Return the numeric RAID level, or -1 for labels such as "1+0"."""
    if not RAID_LEVEL_RE.fullmatch(value):
        return RAID_LEVEL_UNKNOWN
    return int(value)


def normalize_record(record: LogicalDriveRecord) -> Optional[DriveSample]:
    """
    Normalize a parsed logical drive record.

    Returns None when the capacity cannot be parsed (or comes out negative);
    such records are not exported.
    """
    capacity_mb = parse_capacity(record.capacity_raw)
    if capacity_mb < 0:
        return None
    return DriveSample(
        status=parse_status(record.status_raw),
        capacity_mb=capacity_mb,
        raid_level=parse_raid_level(record.raid_level_raw),
    )
