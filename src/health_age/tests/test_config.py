"""Tests for health_age_policy.yaml loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from src.health_age.config_loader import (
    _POLICY_PATH,
    ConfigValidationError,
    _validate_and_build,
    get_health_age_policy,
    load_health_age_policy,
    reload_health_age_policy,
)
from src.health_age.tables import DEFAULT_POLICY, Bucket, HealthAgePolicy


class TestPolicyLoading:
    """Tests for loading the bundled policy."""

    def test_load_default_policy(self, health_age_policy: HealthAgePolicy) -> None:
        assert health_age_policy.version == "1.0"
        assert health_age_policy.ux_clamp_delta == 7

    def test_bundled_yaml_matches_builtin_policy(self, health_age_policy: HealthAgePolicy) -> None:
        assert health_age_policy == DEFAULT_POLICY

    def test_gender_thresholds(self, health_age_policy: HealthAgePolicy) -> None:
        assert health_age_policy.body_fat_low.for_gender("male") == 15.0
        assert health_age_policy.body_fat_low.for_gender("female") == 25.0
        assert health_age_policy.smi_standard_min.for_gender("male") == 8.5

    def test_tables_loaded(self, health_age_policy: HealthAgePolicy) -> None:
        assert len(health_age_policy.expected_ffm_by_age.male) == 12
        assert health_age_policy.smm_standard_min_by_height.female[0] == Bucket(155, 19.0)

    def test_singleton_is_cached(self) -> None:
        assert get_health_age_policy() is get_health_age_policy()

    def test_load_nonexistent_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_health_age_policy(path=Path("/nonexistent/path/policy.yaml"))

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "policy.yaml"
        bad.write_text("version: [unclosed\n")
        with pytest.raises(ConfigValidationError, match="YAML parse error"):
            load_health_age_policy(path=bad)


class TestPolicyValidation:
    """Tests for policy validation logic."""

    def test_missing_section_raises(self, raw_policy: dict) -> None:
        del raw_policy["metabolic"]
        with pytest.raises(ConfigValidationError, match="metabolic"):
            _validate_and_build(raw_policy)

    def test_inverted_ramp_raises(self, raw_policy: dict) -> None:
        raw_policy["body_fat"]["ramp"]["male"] = {"good": 20, "bad": 12}
        with pytest.raises(ConfigValidationError, match="body_fat.ramp.male"):
            _validate_and_build(raw_policy)

    def test_descending_buckets_raise(self, raw_policy: dict) -> None:
        raw_policy["expected_ffm_by_age"]["female"][3] = [20, 40]
        with pytest.raises(ConfigValidationError, match="strictly ascending"):
            _validate_and_build(raw_policy)

    def test_non_numeric_threshold_raises(self, raw_policy: dict) -> None:
        raw_policy["visceral_fat"]["low"] = "six"
        with pytest.raises(ConfigValidationError, match="visceral_fat.low"):
            _validate_and_build(raw_policy)

    def test_bool_is_not_a_number(self, raw_policy: dict) -> None:
        raw_policy["muscle"]["smi_ramp_half_width"] = True
        with pytest.raises(ConfigValidationError, match="smi_ramp_half_width"):
            _validate_and_build(raw_policy)

    def test_ratio_bounds_ordered(self, raw_policy: dict) -> None:
        raw_policy["metabolic"]["ratio"] = {"min": 1.5, "max": 0.7}
        with pytest.raises(ConfigValidationError, match="ratio"):
            _validate_and_build(raw_policy)

    def test_all_errors_reported_together(self, raw_policy: dict) -> None:
        raw_policy["visceral_fat"]["low"] = "six"
        raw_policy["age_range"] = {"min": 99, "max": 10}
        with pytest.raises(ConfigValidationError, match="2 validation error"):
            _validate_and_build(raw_policy)

    def test_hot_reload(self, tmp_path: Path, raw_policy: dict) -> None:
        """reload_health_age_policy() should replace the global singleton."""
        raw_policy["version"] = "2.0-test"
        raw_policy["ux_clamp_delta_years"] = 5
        policy_file = tmp_path / "health_age_policy.yaml"
        policy_file.write_text(yaml.safe_dump(raw_policy))

        try:
            new_policy = reload_health_age_policy(path=policy_file)
            assert new_policy.version == "2.0-test"
            assert get_health_age_policy() is new_policy
            assert new_policy.ux_clamp_delta == 5
        finally:
            reload_health_age_policy(_POLICY_PATH)

    def test_failed_reload_keeps_previous_policy(self, tmp_path: Path, raw_policy: dict) -> None:
        before = get_health_age_policy()
        raw_policy["visceral_fat"]["worst"] = 2
        policy_file = tmp_path / "health_age_policy.yaml"
        policy_file.write_text(yaml.safe_dump(raw_policy))

        with pytest.raises(ConfigValidationError):
            reload_health_age_policy(path=policy_file)
        assert get_health_age_policy() is before
