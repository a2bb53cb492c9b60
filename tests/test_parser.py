"""Tests for ssacli output parsing."""

from ssa_exporter.parser import (
    LogicalDriveRecord,
    iter_logical_drives,
    parse_controller_slots,
    parse_logical_drives,
)

from conftest import CTRL_ALL_SHOW, SLOT0_LD_SHOW, SLOT3_LD_SHOW


class TestParseControllerSlots:
    def test_slots_in_textual_order(self):
        text = "header\nController in Slot 0 (Embedded)\nnoise Slot\nOther in Slot 3\n"
        scan = parse_controller_slots(text)
        assert scan.slots == [0, 3]
        assert scan.match_count == 2

    def test_real_listing(self):
        scan = parse_controller_slots(CTRL_ALL_SHOW.decode())
        assert scan.slots == [0, 3]
        assert scan.match_count == 2

    def test_duplicates_are_kept(self):
        scan = parse_controller_slots("Slot 1\nSlot 1\n")
        assert scan.slots == [1, 1]
        assert scan.match_count == 2

    def test_no_match_is_empty(self):
        scan = parse_controller_slots("Error: No controllers detected.\n")
        assert scan.slots == []
        assert scan.match_count == 0

    def test_overflowing_slot_counts_but_is_skipped(self):
        text = "Slot 0\nSlot 99999999999999999999999\nSlot 2\n"
        scan = parse_controller_slots(text)
        assert scan.slots == [0, 2]
        assert scan.match_count == 3

    def test_max_int64_slot_is_valid(self):
        scan = parse_controller_slots("Slot 9223372036854775807")
        assert scan.slots == [9223372036854775807]


class TestParseLogicalDrives:
    def test_two_records(self):
        records = parse_logical_drives(SLOT0_LD_SHOW.decode())
        assert records == [
            LogicalDriveRecord(number=1, capacity_raw="279.4 GB", raid_level_raw="1", status_raw="OK"),
            LogicalDriveRecord(number=2, capacity_raw="1.5 TB", raid_level_raw="0", status_raw="Failed"),
        ]

    def test_non_numeric_raid_and_multiword_status(self):
        records = parse_logical_drives(SLOT3_LD_SHOW.decode())
        assert len(records) == 1
        assert records[0].raid_level_raw == "1+0"
        assert records[0].status_raw == "Interim Recovery Mode"

    def test_bad_number_skips_only_that_record(self):
        text = (
            "logicaldrive 99999999999999999999 (10 GB, RAID 5, OK)\n"
            "logicaldrive 4 (20 GB, RAID 5, OK)\n"
        )
        records = parse_logical_drives(text)
        assert [r.number for r in records] == [4]

    def test_mismatch_is_empty(self):
        assert parse_logical_drives("Error: The controller identified by \"slot=9\" was not detected.") == []

    def test_iter_is_lazy(self):
        it = iter_logical_drives(SLOT0_LD_SHOW.decode())
        first = next(it)
        assert first.number == 1
        assert next(it).number == 2
