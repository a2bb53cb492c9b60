"""
Base metrics sink interface for the Smart Storage Array exporter.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable

# Initialize logger
LOG = logging.getLogger(__name__)

class MetricsSink(ABC):
    """
    Base class for everything the collector writes metric values into.
    """

    @abstractmethod
    def set_controller_count(self, count: int) -> None:
        """
        Record the number of controllers found by the last discovery.

        Args:
            count: Number of "Slot <n>" matches in the listing output
        """
        pass

    @abstractmethod
    def set_drive_metrics(self, slot: int, number: int, status: int,
                          capacity_mb: int, raid_level: int) -> None:
        """
        Record the latest values for one logical drive, replacing any previous ones.

        Args:
            slot: Controller slot the drive belongs to
            number: Logical drive number within the controller
            status: 0 when healthy, 1 otherwise
            capacity_mb: Capacity in megabytes
            raid_level: Numeric RAID level, -1 when not numeric
        """
        pass

    def prune(self, slot: int, keep_numbers: Iterable[int]) -> int:
        """
        Optional stale-entry removal for one controller.
        Default implementation keeps everything - override in sinks that hold state.

        Returns:
            Number of entries removed
        """
        return 0

    def retain_slots(self, slots: Iterable[int]) -> int:
        """
        Optional removal of entries for controllers that are no longer present.
        Default implementation keeps everything - override in sinks that hold state.

        Returns:
            Number of entries removed
        """
        return 0
