"""Shared test fixtures."""

from typing import Dict, List, Tuple, Union

import pytest
from prometheus_client import CollectorRegistry

from ssa_exporter.command import CommandRunner, LIST_CONTROLLERS_ARGS, logical_drive_args
from ssa_exporter.exceptions import CommandError
from ssa_exporter.writer.metrics_store import MetricsStore

CTRL_ALL_SHOW = b"""
Smart Array P420i in Slot 0 (Embedded)    (sn: 001438031A2B3C0)
Smart Array P822 in Slot 3                (sn: PDVTF0ARH4A1B2)

"""

SLOT0_LD_SHOW = b"""
Smart Array P420i in Slot 0 (Embedded)

   array A

      logicaldrive 1 (279.4 GB, RAID 1, OK)

   array B

      logicaldrive 2 (1.5 TB, RAID 0, Failed)

"""

SLOT3_LD_SHOW = b"""
Smart Array P822 in Slot 3

   array A

      logicaldrive 1 (3.6 TB, RAID 1+0, Interim Recovery Mode)

"""

Output = Union[bytes, Exception]


class FakeRunner(CommandRunner):
    """CommandRunner that returns canned output instead of running ssacli."""

    def __init__(self, outputs: Dict[Tuple[str, ...], Output]):
        super().__init__(executable='ssacli')
        self.outputs = outputs
        self.calls: List[List[str]] = []

    def run(self, args) -> bytes:
        self.calls.append(list(args))
        key = tuple(args)
        if key not in self.outputs:
            raise CommandError(f"no canned output for {args}", args=args, returncode=1)
        output = self.outputs[key]
        if isinstance(output, Exception):
            raise output
        return output


def ctrl_key():
    return tuple(LIST_CONTROLLERS_ARGS)


def ld_key(slot):
    return tuple(logical_drive_args(slot))


@pytest.fixture
def healthy_outputs():
    return {
        ctrl_key(): CTRL_ALL_SHOW,
        ld_key(0): SLOT0_LD_SHOW,
        ld_key(3): SLOT3_LD_SHOW,
    }


@pytest.fixture
def fake_runner(healthy_outputs):
    return FakeRunner(healthy_outputs)


@pytest.fixture
def store():
    return MetricsStore()


@pytest.fixture
def registry(store):
    registry = CollectorRegistry()
    registry.register(store)
    return registry
