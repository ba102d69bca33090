"""Tests for CLIConfig schema and conversion to internal overrides."""

import pytest
from pydantic import ValidationError

pytestmark = pytest.mark.unit

from rider.schemas.cli import CLIConfig


def test_cli_to_internal_overrides_empty():
    """Test CLI config conversion with no overrides."""
    assert CLIConfig().to_internal_overrides() == {}


def test_cli_to_internal_overrides_with_lengths():
    overrides = CLIConfig(lengths=[8, 4]).to_internal_overrides()
    assert overrides == {"transform": {"lengths": (8, 4)}}


def test_cli_to_internal_overrides_with_log_level():
    """Test CLI config conversion with log_level override."""
    overrides = CLIConfig(log_level="DEBUG", log_file="/tmp/rider.log").to_internal_overrides()
    assert overrides["logging"] == {"level": "DEBUG", "log_file": "/tmp/rider.log"}


def test_cli_to_internal_overrides_with_multiple_fields():
    cli = CLIConfig(transform_type=3, itype=3, istride=[1, 5], ntrial=10, device_id=1)
    overrides = cli.to_internal_overrides()
    assert overrides["transform"]["transform_type"] == 3
    assert overrides["transform"]["itype"] == 3
    assert overrides["transform"]["istride"] == (1, 5)
    assert overrides["benchmark"] == {"ntrial": 10, "device_id": 1}


def test_outofplace_flag_sets_placement():
    """CLI sets placement=notinplace if -o given without explicit placement."""
    cli = CLIConfig(outofplace=True)
    assert cli.placement == "notinplace"
    assert cli.to_internal_overrides()["transform"]["placement"] == "notinplace"


def test_explicit_placement_wins_over_flag():
    cli = CLIConfig(outofplace=True, placement="inplace")
    assert cli.placement == "inplace"


def test_no_flag_leaves_placement_unset():
    assert CLIConfig(outofplace=False).placement is None
    assert "transform" not in CLIConfig(outofplace=False).to_internal_overrides()


def test_labels_are_normalized():
    cli = CLIConfig(transform_type="Complex-Inverse", otype="COMPLEX_PLANAR")
    assert cli.transform_type == "complex_inverse"
    assert cli.otype == "complex_planar"


def test_cli_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        CLIConfig(radix=4)


def test_cli_config_all_log_levels():
    """Test all valid log levels."""
    for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        overrides = CLIConfig(log_level=level).to_internal_overrides()
        assert overrides["logging"]["level"] == level
