"""Tests for the ssacli command runner."""

import subprocess
from unittest.mock import patch

import pytest

from ssa_exporter.command import CommandRunner, logical_drive_args
from ssa_exporter.exceptions import CommandError


def completed(args, returncode=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess(args, returncode=returncode, stdout=stdout, stderr=stderr)


@patch('ssa_exporter.command.subprocess.run')
def test_run_returns_stdout(mock_run):
    mock_run.return_value = completed(['ssacli', 'ctrl', 'all', 'show'], stdout=b"Slot 0\n")
    runner = CommandRunner()

    assert runner.list_controllers() == b"Slot 0\n"
    cmd = mock_run.call_args[0][0]
    assert cmd == ['ssacli', 'ctrl', 'all', 'show']
    assert mock_run.call_args[1]['timeout'] is None


@patch('ssa_exporter.command.subprocess.run')
def test_show_logical_drives_arguments(mock_run):
    mock_run.return_value = completed([], stdout=b"")
    runner = CommandRunner(executable='/opt/smartstorageadmin/ssacli/bin/ssacli', timeout=30)

    runner.show_logical_drives(3)
    cmd = mock_run.call_args[0][0]
    assert cmd == ['/opt/smartstorageadmin/ssacli/bin/ssacli', 'ctrl', 'slot=3', 'ld', 'all', 'show']
    assert mock_run.call_args[1]['timeout'] == 30


def test_logical_drive_args():
    assert logical_drive_args(0) == ['ctrl', 'slot=0', 'ld', 'all', 'show']


@patch('ssa_exporter.command.subprocess.run')
def test_nonzero_exit_raises(mock_run):
    mock_run.return_value = completed([], returncode=1, stdout=b"", stderr=b"Error: no controllers\n")

    with pytest.raises(CommandError) as excinfo:
        CommandRunner().list_controllers()
    assert excinfo.value.returncode == 1
    assert excinfo.value.stderr == "Error: no controllers"


@patch('ssa_exporter.command.subprocess.run', side_effect=FileNotFoundError(2, "No such file", "ssacli"))
def test_missing_executable_raises(mock_run):
    with pytest.raises(CommandError, match="not found"):
        CommandRunner().list_controllers()


@patch('ssa_exporter.command.subprocess.run',
       side_effect=subprocess.TimeoutExpired(cmd=['ssacli'], timeout=5))
def test_timeout_raises(mock_run):
    with pytest.raises(CommandError, match="timed out"):
        CommandRunner(timeout=5).list_controllers()


@patch('ssa_exporter.command.subprocess.run', side_effect=PermissionError(13, "Permission denied"))
def test_launch_error_raises(mock_run):
    with pytest.raises(CommandError, match="Failed to launch"):
        CommandRunner().list_controllers()
