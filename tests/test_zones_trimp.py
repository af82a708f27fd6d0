"""Tests for zone models, time in zones and TRIMP scoring policies."""
import pytest
from datetime import date

from forma.calculations import (
    DynamicZoneModel,
    FormaLoadConfig,
    HrZone,
    InvalidInput,
    InvalidParameter,
    StaticZoneModel,
    TrimpPolicy,
    calculate_dynamic_zones,
    calculate_edwards_trimp,
    calculate_hr_zones,
    calculate_time_in_zones,
    calculate_trimp,
    calculate_zonal_trimp,
    classify_hr,
    estimate_trimp,
)


def table_model(weights=None):
    rows = [
        {"zone": 1, "min": 100, "max": 119},
        {"zone": 2, "min": 120, "max": 139},
        {"zone": 3, "min": 140, "max": 159},
        {"zone": 4, "min": 160, "max": 179},
        {"zone": 5, "min": 180, "max": 200},
    ]
    return DynamicZoneModel.from_table(rows, weights=weights)


class TestStaticZones:
    """Tests for calculate_hr_zones."""

    def test_boundaries_for_190(self):
        b = calculate_hr_zones(190).boundaries
        assert (b["z1_min"], b["z1_max"]) == (95, 113)
        assert (b["z2_min"], b["z2_max"]) == (114, 132)
        assert (b["z3_min"], b["z3_max"]) == (133, 151)
        assert (b["z4_min"], b["z4_max"]) == (152, 170)
        assert (b["z5_min"], b["z5_max"]) == (171, 190)

    def test_contiguous(self, static_zones):
        zones = static_zones.zones
        for lower, upper in zip(zones, zones[1:]):
            assert upper.min == lower.max + 1

    def test_half_rounds_up(self):
        assert calculate_hr_zones(185).boundaries["z1_min"] == 93

    @pytest.mark.parametrize("max_hr", [0, -10])
    def test_invalid_max_hr(self, max_hr):
        with pytest.raises(InvalidParameter):
            calculate_hr_zones(max_hr)

    def test_missing_boundary_rejected(self):
        with pytest.raises(InvalidInput):
            StaticZoneModel({"z1_min": 100, "z1_max": 119})

    def test_edwards_weights(self, static_zones):
        assert [static_zones.weight(z) for z in range(1, 6)] == [1, 2, 3, 4, 5]


class TestClassification:
    """Zone lookup and the below-zone-1 drop."""

    def test_each_boundary_value(self, static_zones):
        for hr, zone in [(100, 1), (120, 2), (140, 3), (160, 4), (180, 5), (200, 5)]:
            assert classify_hr(hr, static_zones) == zone

    def test_below_zone_one_unclassified(self, static_zones):
        assert classify_hr(99, static_zones) is None
        assert classify_hr(float("nan"), static_zones) is None

    def test_below_zone_one_not_counted(self, static_zones):
        times = calculate_time_in_zones([99, 100, 120, 140, 160, 180], static_zones)
        assert times == [1, 1, 1, 1, 1]
        assert sum(times) == 5

    def test_time_in_zones_mixed_stream(self):
        stream = [90, 105, 110, 125, 145, 150, 155, 175, 185, 190]
        assert calculate_time_in_zones(stream, table_model()) == [2, 1, 3, 1, 2]

    def test_empty_stream(self, static_zones):
        assert calculate_time_in_zones([], static_zones) == [0.0] * 5

    def test_time_stream_skips_pauses(self, static_zones):
        hr = [150, 150, 150, 150]
        time = [0, 1, 2, 100]
        assert calculate_time_in_zones(hr, static_zones, time) == [0, 0, 2, 0, 0]

    def test_mismatched_time_stream_falls_back_to_1hz(self, static_zones):
        assert calculate_time_in_zones([150, 150, 150], static_zones, [0, 5]) == [0, 0, 3, 0, 0]


class TestDynamicZones:
    """Tests for DynamicZoneModel and calculate_dynamic_zones."""

    def test_lthr_friel(self):
        model = calculate_dynamic_zones(lthr=160)
        assert model.model_type == "LTHR_FRIEL"
        assert [z.min for z in model.zones] == [0, 137, 143, 151, 159]
        assert [z.max for z in model.zones] == [136, 142, 150, 158, 250]
        assert model.zones[0].label == "Recovery"
        assert model.estimated_max_hr == 178

    def test_age_based(self):
        model = calculate_dynamic_zones(birth_date=date(1990, 6, 15), today=date(2026, 10, 19))
        assert model.model_type == "HRMAX_AGE"
        assert model.source_value == 184
        assert [z.max for z in model.zones][:4] == [110, 128, 147, 165]

    def test_lthr_takes_priority_over_age(self):
        model = calculate_dynamic_zones(lthr=170, birth_date=date(1990, 1, 1))
        assert model.model_type == "LTHR_FRIEL"

    def test_static_default(self):
        model = calculate_dynamic_zones()
        assert model.model_type == "STATIC"
        assert [z.min for z in model.zones] == [0, 121, 141, 161, 181]

    def test_default_weights(self):
        model = table_model()
        assert [model.weight(z) for z in range(1, 6)] == [1.0, 1.1, 1.2, 1.3, 1.5]
        assert model.weight(9) == 1.0

    def test_overlapping_zones_rejected(self):
        zones = [HrZone(i, 100 + 20 * i, 125 + 20 * i) for i in range(1, 6)]
        with pytest.raises(InvalidInput):
            DynamicZoneModel(zones)

    def test_missing_zone_rejected(self):
        zones = [HrZone(i, 100 + 20 * i, 119 + 20 * i) for i in range(1, 5)]
        with pytest.raises(InvalidInput):
            DynamicZoneModel(zones)

    def test_snapshot_carries_thresholds(self):
        snapshot = table_model().snapshot()
        assert len(snapshot) == 5
        assert snapshot[0] == {"zone": 1, "min": 100, "max": 119, "label": ""}


class TestTrimp:
    """Tests for the three scoring policies."""

    def test_edwards(self):
        assert calculate_edwards_trimp([60, 120, 180, 60, 60]) == 23

    def test_edwards_rounds_to_one_decimal(self):
        assert calculate_edwards_trimp([10, 0, 0, 0, 0]) == 0.2

    @pytest.mark.parametrize("times", [[60, 60, 60, 60], [60] * 6, []])
    def test_wrong_length_rejected(self, times):
        with pytest.raises(InvalidInput):
            calculate_edwards_trimp(times)

    def test_negative_or_nan_times_rejected(self):
        with pytest.raises(InvalidInput):
            calculate_edwards_trimp([60, -1, 0, 0, 0])
        with pytest.raises(InvalidInput):
            calculate_edwards_trimp([60, float("nan"), 0, 0, 0])

    def test_zonal_uses_model_weights(self):
        assert calculate_zonal_trimp([600, 600, 0, 0, 0], table_model()) == pytest.approx(21.0)

    def test_zonal_custom_weights(self):
        model = table_model(weights={1: 2.0, 2: 2.0, 3: 2.0, 4: 2.0, 5: 2.0})
        assert calculate_zonal_trimp([60, 60, 60, 60, 60], model) == pytest.approx(10.0)

    def test_estimate(self):
        assert estimate_trimp(3600, 1.0) == pytest.approx(100.0)
        assert estimate_trimp(1800, 0.8) == pytest.approx(32.0)

    @pytest.mark.parametrize("duration,if_value", [(0, 1.0), (3600, 0), (-60, 1.0), (3600, -0.5)])
    def test_estimate_zero_for_non_positive(self, duration, if_value):
        assert estimate_trimp(duration, if_value) == 0.0

    def test_dispatch(self, static_zones):
        times = [60, 120, 180, 60, 60]
        assert calculate_trimp(TrimpPolicy.EDWARDS, times) == 23
        assert calculate_trimp("zonal", times, model=static_zones) == 23
        assert calculate_trimp(TrimpPolicy.ESTIMATE, duration_seconds=3600, intensity_factor=1.0) == pytest.approx(100)

    def test_dispatch_forma(self):
        config = FormaLoadConfig(max_hr=200, rest_hr=50)
        assert calculate_trimp(TrimpPolicy.FORMA, hr_stream=[125] * 3600, forma_config=config) == pytest.approx(50.14, abs=0.01)

    def test_zonal_requires_model(self):
        with pytest.raises(InvalidInput):
            calculate_trimp(TrimpPolicy.ZONAL, [60] * 5)

    def test_forma_requires_config(self):
        with pytest.raises(InvalidInput):
            calculate_trimp(TrimpPolicy.FORMA, hr_stream=[140] * 10)
