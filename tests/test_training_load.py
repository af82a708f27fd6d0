"""Tests for daily TRIMP aggregation and the load chain."""
import pytest
from datetime import date, datetime, timedelta, timezone

from forma.calculations import InvalidParameter, build_weekly_profiles, calculate_ctl
from forma.config import Config
from forma.models import TrainingSnapshot
from forma.simulation import simulate_load
from forma.training_load import (
    TrainingLoadManager,
    aggregate_daily_trimp,
    generate_training_snapshot,
)


def day(offset, first=date(2026, 9, 7)):
    return first + timedelta(days=offset)


class TestAggregateDailyTrimp:
    """Tests for aggregate_daily_trimp."""

    def test_sums_per_day(self):
        daily = aggregate_daily_trimp([
            ("2026-10-01T07:00:00", 50.0),
            ("2026-10-01T18:30:00", 30.5),
            ("2026-10-03T09:15:00", 20.0),
        ])
        assert daily == {date(2026, 10, 1): 80.5, date(2026, 10, 3): 20.0}
        assert list(daily) == sorted(daily)

    def test_empty(self):
        assert aggregate_daily_trimp([]) == {}

    def test_negative_rejected(self):
        with pytest.raises(InvalidParameter):
            aggregate_daily_trimp([("2026-10-01T07:00:00", -5.0)])

    def test_mixed_iso_forms(self):
        daily = aggregate_daily_trimp([
            ("2026-10-01T07:00:00Z", 50.0),
            ("2026-10-02", 20.0),
            ("2026-10-02T21:30:00+02:00", 10.0),
        ])
        assert daily == {date(2026, 10, 1): 50.0, date(2026, 10, 2): 30.0}

    def test_datetimes_across_offset_change_keep_local_day(self):
        summer = timezone(timedelta(hours=2))
        winter = timezone(timedelta(hours=1))
        daily = aggregate_daily_trimp([
            (datetime(2026, 10, 24, 23, 30, tzinfo=summer), 40.0),
            (datetime(2026, 10, 26, 0, 15, tzinfo=winter), 25.0),
            (datetime(2026, 10, 26, 7, 0, tzinfo=timezone.utc), 15.0),
            (date(2026, 10, 27), 5.0),
        ])
        assert daily == {
            date(2026, 10, 24): 40.0,
            date(2026, 10, 26): 40.0,
            date(2026, 10, 27): 5.0,
        }


class TestCalculateLoad:
    """Tests for TrainingLoadManager.calculate_load."""

    def test_rest_days_filled(self, fixed_time):
        manager = TrainingLoadManager("athlete-1")
        samples = manager.calculate_load({day(0): 100.0, day(2): 50.0}, calculated_at=fixed_time)
        assert [s.date for s in samples] == [day(0), day(1), day(2)]
        assert [s.daily_trimp for s in samples] == [100.0, 0.0, 50.0]
        assert samples[0].ctl == pytest.approx(calculate_ctl(100, 0))

    def test_matches_stepwise_chain(self, chain_builder):
        trimps = [80, 0, 65, 120, 0, 0, 40]
        expected = chain_builder(trimps, day(0))
        manager = TrainingLoadManager("athlete-1")
        samples = manager.calculate_load({day(i): float(t) for i, t in enumerate(trimps)})
        assert samples == expected

    def test_seed_continues_chain(self, chain_builder):
        chain = chain_builder([100] * 10, day(0))
        manager = TrainingLoadManager("athlete-1")
        continued = manager.calculate_load({day(i): 100.0 for i in range(5, 10)}, seed=chain[4])
        assert continued == chain[5:]

    def test_explicit_range(self):
        manager = TrainingLoadManager("athlete-1")
        samples = manager.calculate_load({day(0): 100.0}, start=day(0), end=day(6))
        assert len(samples) == 7
        assert all(s.daily_trimp == 0 for s in samples[1:])

    def test_empty(self):
        assert TrainingLoadManager("athlete-1").calculate_load({}) == []

    def test_end_before_start(self):
        manager = TrainingLoadManager("athlete-1")
        assert manager.calculate_load({day(0): 10.0}, start=day(5), end=day(1)) == []

    def test_time_constants(self):
        assert TrainingLoadManager.CTL_DAYS == 42
        assert TrainingLoadManager.ATL_DAYS == 7


class TestSyncLoadChain:
    """Tests for forward recomputation with convergence."""

    @pytest.fixture
    def stored_chain(self):
        manager = TrainingLoadManager("athlete-1")
        daily = {day(i): 90.0 for i in range(10)}
        samples = manager.calculate_load(daily, start=day(0), end=day(59))
        return daily, {s.date: s for s in samples}

    def test_converges_after_stable_window(self, stored_chain):
        daily, stored = stored_chain
        manager = TrainingLoadManager("athlete-1")
        result = manager.sync_load_chain(daily, day(0), end_date=day(59), stored=stored)
        window = Config.CHAIN_CONVERGENCE_WINDOW
        # Last activity is day 9; stable streak starts on day 10
        assert result.converged
        assert result.converged_at == day(9 + window)
        assert len(result.samples) == 9 + window
        assert result.samples[-1] == stored[day(8 + window)]

    def test_changed_activity_propagates(self, stored_chain):
        daily, stored = stored_chain
        changed = dict(daily)
        changed[day(5)] = 140.0
        manager = TrainingLoadManager("athlete-1")
        result = manager.sync_load_chain(changed, day(5), end_date=day(59), seed=stored[day(4)], stored=stored)
        assert not result.converged
        assert len(result.samples) == 55
        assert result.samples[0].ctl > stored[day(5)].ctl

    def test_no_stored_samples_never_converges(self):
        manager = TrainingLoadManager("athlete-1")
        result = manager.sync_load_chain({day(0): 50.0}, day(0), end_date=day(40))
        assert not result.converged
        assert len(result.samples) == 41

    def test_days_before_last_activity_never_count(self, stored_chain):
        daily, stored = stored_chain
        late = dict(daily)
        late[day(50)] = 0.0
        manager = TrainingLoadManager("athlete-1")
        result = manager.sync_load_chain(late, day(0), end_date=day(59), stored=stored)
        assert not result.converged
        assert len(result.samples) == 60

    def test_end_before_start(self):
        result = TrainingLoadManager("athlete-1").sync_load_chain({}, day(5), end_date=day(1))
        assert result.samples == []


class TestCurrentAndFutureForm:
    """Tests for get_current_form and predict_future_form."""

    def test_current_form_is_today(self):
        manager = TrainingLoadManager("athlete-1")
        current = manager.get_current_form({day(0): 80.0, day(3): 60.0}, today=day(10))
        assert current.date == day(10)
        assert current.daily_trimp == 0

    def test_current_form_without_data(self):
        assert TrainingLoadManager("athlete-1").get_current_form({}, today=day(0)) is None

    def test_predict_future_form(self, make_sample):
        current = make_sample(ctl=40, atl=55)
        manager = TrainingLoadManager("athlete-1")
        predicted = manager.predict_future_form(current, [100, 50, 0, 80], days=3)
        assert predicted == simulate_load(current, [100, 50, 0])


class TestTrainingSnapshot:
    """Tests for generate_training_snapshot."""

    def test_assembles_payload(self, load_series, fixed_time):
        weekly = build_weekly_profiles(load_series)[-1]
        planned = [{"id": "workout_1", "title": "Tempo Run"}]
        snapshot = generate_training_snapshot(load_series[-1], weekly, planned, generated_at=fixed_time)
        assert isinstance(snapshot, TrainingSnapshot)
        assert snapshot.current_profile == load_series[-1]
        assert snapshot.recent_week == weekly
        assert len(snapshot.next_workouts) == 1
        assert snapshot.generated_at == fixed_time

    def test_defaults(self, make_sample):
        snapshot = generate_training_snapshot(make_sample())
        assert snapshot.recent_week is None
        assert snapshot.next_workouts == []
        assert snapshot.generated_at is not None
