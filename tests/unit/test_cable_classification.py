"""Unit tests for cable categorisation, routing filters and bundle maps."""

from __future__ import annotations

import pytest

from traylayout.domain.services.bundle_map import build_bundle_map, normalize_bundle_map
from traylayout.domain.services.cable_classification import (
    filter_cables_by_tray,
    match_cable_category,
    resolve_category,
    routing_contains_tray,
)
from traylayout.domain.value_objects import Cable, CableCategory, DiameterBucket


class TestMatchCableCategory:
    """Tests for purpose-text matching."""

    @pytest.mark.parametrize(
        ("purpose", "expected"),
        [
            ("MV feeder", CableCategory.MV),
            ("Medium voltage supply", CableCategory.MV),
            ("VFD motor feed", CableCategory.VFD),
            ("Pump vfd output", CableCategory.VFD),
            ("Power supply", CableCategory.POWER),
            ("UPS power", CableCategory.POWER),
            ("Control signal", CableCategory.CONTROL),
            ("Motor control", CableCategory.CONTROL),
            ("  POWER  ", CableCategory.POWER),
        ],
    )
    def test_matches(self, purpose: str, expected: CableCategory) -> None:
        assert match_cable_category(purpose) is expected

    @pytest.mark.parametrize("purpose", [None, "", "   ", "Lighting", "Earthing"])
    def test_unmatched(self, purpose) -> None:
        assert match_cable_category(purpose) is None

    def test_rules_are_checked_in_order(self) -> None:
        assert match_cable_category("VFD control") is CableCategory.VFD
        assert match_cable_category("MV power") is CableCategory.MV

    def test_explicit_category_wins(self) -> None:
        cable = Cable(id="X", purpose="Power supply", category=CableCategory.CONTROL)
        assert resolve_category(cable) is CableCategory.CONTROL

    def test_falls_back_to_purpose(self) -> None:
        assert resolve_category(Cable(id="X", purpose="VFD")) is CableCategory.VFD


class TestRouting:
    """Tests for tray routing filters."""

    def test_segment_match_is_trimmed_and_case_insensitive(self) -> None:
        assert routing_contains_tray("T1/T2 / t3", "T3")
        assert routing_contains_tray("t1", " T1 ")

    def test_partial_names_do_not_match(self) -> None:
        assert not routing_contains_tray("T10/T11", "T1")

    @pytest.mark.parametrize("routing", [None, ""])
    def test_missing_routing(self, routing) -> None:
        assert not routing_contains_tray(routing, "T1")

    def test_blank_tray_name(self) -> None:
        assert not routing_contains_tray("T1", "  ")

    def test_filter_keeps_input_order(self) -> None:
        cables = [
            Cable(id="A", routing="T1/T2"),
            Cable(id="B", routing="T3"),
            Cable(id="C", routing="T2"),
        ]
        assert [c.id for c in filter_cables_by_tray(cables, "T2")] == ["A", "C"]


class TestBuildBundleMap:
    """Tests for build_bundle_map."""

    def test_groups_by_category_and_bucket(self) -> None:
        cables = [
            Cable(id="P1", diameter=20, purpose="Power"),
            Cable(id="P2", diameter=12, purpose="Power"),
            Cable(id="P3", diameter=19, purpose="Power"),
            Cable(id="C1", diameter=7, purpose="Control"),
        ]
        bundles = build_bundle_map(cables)

        power = bundles[CableCategory.POWER]
        assert [c.id for c in power[DiameterBucket.RANGE_15_1_21]] == ["P1", "P3"]
        assert [c.id for c in power[DiameterBucket.RANGE_8_1_15]] == ["P2"]
        assert [c.id for c in bundles[CableCategory.CONTROL][DiameterBucket.RANGE_0_8]] == [
            "C1"
        ]

    def test_uncategorised_cables_are_skipped(self) -> None:
        bundles = build_bundle_map([Cable(id="L1", diameter=8, purpose="Lighting")])
        assert bundles == {}

    def test_missing_diameter_goes_to_smallest_bucket(self) -> None:
        bundles = build_bundle_map([Cable(id="P1", purpose="Power")])
        assert DiameterBucket.RANGE_0_8 in bundles[CableCategory.POWER]


class TestNormalizeBundleMap:
    """Tests for normalize_bundle_map."""

    def test_string_keys_are_converted(self) -> None:
        cable = Cable(id="P1", diameter=12)
        normalized = normalize_bundle_map({" Power ": {"8.1-15": [cable]}})
        assert normalized == {CableCategory.POWER: {DiameterBucket.RANGE_8_1_15: (cable,)}}

    def test_unknown_keys_and_empty_lists_are_dropped(self) -> None:
        cable = Cable(id="C1", diameter=12)
        normalized = normalize_bundle_map(
            {
                "fibre": {"0-8": [cable]},
                "control": {"999": [cable], "0-8": []},
            }
        )
        assert normalized == {}

    def test_keys_normalising_to_the_same_bucket_are_merged(self) -> None:
        first, second = Cable(id="A", diameter=12), Cable(id="B", diameter=13)
        normalized = normalize_bundle_map(
            {
                "power": {"8.1-15": [first]},
                "POWER ": {" 8.1-15 ": [second]},
            }
        )
        assert normalized[CableCategory.POWER][DiameterBucket.RANGE_8_1_15] == (
            first,
            second,
        )

    @pytest.mark.parametrize("raw", [None, {}])
    def test_empty(self, raw) -> None:
        assert normalize_bundle_map(raw) == {}
