"""Tests for the rest-day projection and peak-day finder."""
import pytest
from datetime import timedelta

from forma.calculations import InvalidInput, InvalidParameter, calculate_atl, calculate_ctl
from forma.simulation import find_peak_day, project_tsb, simulate_load


class TestProjectTsb:
    """Tests for project_tsb."""

    def test_default_horizon(self, make_sample):
        assert len(project_tsb(make_sample())) == 7

    def test_dates_advance_one_day(self, make_sample):
        current = make_sample()
        projection = project_tsb(current, days=10)
        assert [p.date for p in projection] == [current.date + timedelta(days=i) for i in range(1, 11)]

    def test_zero_load_decay(self, make_sample):
        projection = project_tsb(make_sample(ctl=50, atl=50), days=1)
        assert projection[0].daily_trimp == 0
        assert projection[0].ctl == pytest.approx(48.82, abs=0.01)
        assert projection[0].atl == pytest.approx(43.34, abs=0.01)

    def test_fatigued_tsb_strictly_increases(self, make_sample):
        projection = project_tsb(make_sample(ctl=50, atl=80), days=7)
        tsbs = [p.tsb for p in projection]
        assert all(b > a for a, b in zip(tsbs, tsbs[1:]))

    def test_peak_is_last_day_when_increasing(self, make_sample):
        projection = project_tsb(make_sample(ctl=50, atl=80), days=7)
        assert find_peak_day(projection) == projection[-1]

    def test_zero_chronic_guard(self, make_sample):
        projection = project_tsb(make_sample(ctl=0, atl=0), days=3)
        assert all(p.acwr == 0.0 for p in projection)

    @pytest.mark.parametrize("days", [0, -3])
    def test_invalid_horizon(self, make_sample, days):
        with pytest.raises(InvalidParameter):
            project_tsb(make_sample(), days=days)

    def test_deterministic(self, make_sample):
        current = make_sample(ctl=42.5, atl=61.2)
        assert project_tsb(current) == project_tsb(current)


class TestSimulateLoad:
    """Tests for simulate_load with planned training."""

    def test_planned_trimp_applied(self, make_sample):
        current = make_sample(ctl=40, atl=60)
        projection = simulate_load(current, [100, 0])
        assert projection[0].ctl == pytest.approx(calculate_ctl(100, 40))
        assert projection[0].atl == pytest.approx(calculate_atl(100, 60))
        assert projection[0].tsb == -20
        assert projection[1].daily_trimp == 0

    def test_keeps_owner_and_version(self, make_sample):
        projection = simulate_load(make_sample(user_id="athlete-9"), [10])
        assert projection[0].user_id == "athlete-9"
        assert projection[0].formula_version == "1.0.0"


class TestFindPeakDay:
    """Tests for find_peak_day."""

    def test_highest_tsb(self, make_sample):
        samples = [make_sample(tsb=t) for t in (-5, 12, 3)]
        assert find_peak_day(samples).tsb == 12

    def test_tie_goes_to_earliest(self, make_sample, start_day):
        samples = [
            make_sample(day=start_day + timedelta(days=i), tsb=t)
            for i, t in enumerate([1.0, 8.0, 8.0, 2.0])
        ]
        assert find_peak_day(samples).date == start_day + timedelta(days=1)

    def test_empty_projection(self):
        with pytest.raises(InvalidInput):
            find_peak_day([])
