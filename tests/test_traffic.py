"""Tests for station traffic aggregation and the time filter."""

import unittest

import pandas as pd

from bikemap.config import NO_FILTER
from bikemap.data.traffic import aggregate_traffic, filter_trips_by_minute, minute_of_day


def make_stations(rows):
    return pd.DataFrame(rows, columns=['short_name', 'name', 'lat', 'lon'])


def make_trips(rows):
    trips = pd.DataFrame(rows, columns=['start_station_id', 'end_station_id', 'started_at', 'ended_at'])
    trips['started_at'] = pd.to_datetime(trips['started_at'])
    trips['ended_at'] = pd.to_datetime(trips['ended_at'])
    return trips


STATIONS = make_stations([
    ('A32000', 'MIT at Mass Ave', 42.3581, -71.0936),
    ('M32006', 'Central Square', 42.3651, -71.1032),
    ('B32012', 'Kendall T', 42.3625, -71.0862),
])

TRIPS = make_trips([
    ('A32000', 'M32006', '2024-03-01 08:05:00', '2024-03-01 08:20:00'),
    ('A32000', 'B32012', '2024-03-02 08:40:00', '2024-03-02 08:55:00'),
    ('M32006', 'A32000', '2024-03-03 17:30:00', '2024-03-03 17:45:00'),
    ('Z99999', 'A32000', '2024-03-04 23:50:00', '2024-03-05 00:10:00'),
])


class TestMinuteOfDay(unittest.TestCase):

    def test_ignores_date(self):
        times = pd.to_datetime(pd.Series(['2024-03-01 10:00:00', '2024-03-09 00:10:59']))
        self.assertEqual(minute_of_day(times).tolist(), [600, 10])


class TestAggregateTraffic(unittest.TestCase):

    def test_counts_departures_and_arrivals(self):
        result = aggregate_traffic(STATIONS, TRIPS).set_index('short_name')

        self.assertEqual(result.loc['A32000', 'departures'], 2)
        self.assertEqual(result.loc['A32000', 'arrivals'], 2)
        self.assertEqual(result.loc['M32006', 'departures'], 1)
        self.assertEqual(result.loc['M32006', 'arrivals'], 1)
        self.assertEqual(result.loc['B32012', 'departures'], 0)
        self.assertEqual(result.loc['B32012', 'arrivals'], 1)

    def test_total_is_sum(self):
        result = aggregate_traffic(STATIONS, TRIPS)
        pd.testing.assert_series_equal(
            result['total_traffic'], result['departures'] + result['arrivals'], check_names=False
        )
        self.assertTrue((result['total_traffic'] >= 0).all())

    def test_preserves_order_and_input(self):
        before = STATIONS.copy()
        result = aggregate_traffic(STATIONS, TRIPS)

        self.assertEqual(result['short_name'].tolist(), ['A32000', 'M32006', 'B32012'])
        pd.testing.assert_frame_equal(STATIONS, before)
        self.assertNotIn('departures', STATIONS.columns)

    def test_no_trips_gives_zero(self):
        result = aggregate_traffic(STATIONS, TRIPS.iloc[0:0])
        self.assertEqual(result['total_traffic'].tolist(), [0, 0, 0])

    def test_single_round_trip(self):
        stations = make_stations([('A', 'A', 42.36, -71.09)])
        trips = make_trips([('A', 'A', '2024-03-01 00:10:00', '2024-03-01 00:20:00')])

        row = aggregate_traffic(stations, trips).iloc[0]
        self.assertEqual((row['departures'], row['arrivals'], row['total_traffic']), (1, 1, 2))


class TestFilterTripsByMinute(unittest.TestCase):

    def test_sentinel_is_identity(self):
        self.assertIs(filter_trips_by_minute(TRIPS, NO_FILTER), TRIPS)
        self.assertIs(filter_trips_by_minute(TRIPS, None), TRIPS)

    def test_window_around_minute(self):
        # 08:00 keeps the two morning trips
        result = filter_trips_by_minute(TRIPS, 480)
        self.assertEqual(len(result), 2)

        starts = minute_of_day(result['started_at'])
        ends = minute_of_day(result['ended_at'])
        self.assertTrue((((starts - 480).abs() <= 60) | ((ends - 480).abs() <= 60)).all())

    def test_window_edges_inclusive(self):
        trips = make_trips([('A', 'A', '2024-03-01 09:00:00', '2024-03-01 09:30:00')])
        self.assertEqual(len(filter_trips_by_minute(trips, 480)), 1)
        self.assertEqual(len(filter_trips_by_minute(trips, 479)), 0)

    def test_end_time_alone_matches(self):
        # Ends at 00:10; start minute 1430 is far from 0 without wraparound
        late = TRIPS[TRIPS['start_station_id'] == 'Z99999']
        self.assertEqual(len(filter_trips_by_minute(late, 0)), 1)
        self.assertEqual(len(filter_trips_by_minute(late, 1439)), 1)
        self.assertEqual(len(filter_trips_by_minute(late, 720)), 0)

    def test_result_is_subset_and_input_unchanged(self):
        before = TRIPS.copy()
        result = filter_trips_by_minute(TRIPS, 1050)

        self.assertTrue(set(result.index) <= set(TRIPS.index))
        pd.testing.assert_frame_equal(TRIPS, before)

    def test_unparsed_times_never_match(self):
        trips = make_trips([('A', 'A', None, None)])
        self.assertEqual(len(filter_trips_by_minute(trips, 0)), 0)

    def test_rejects_out_of_range(self):
        with self.assertRaises(ValueError):
            filter_trips_by_minute(TRIPS, 1440)
        with self.assertRaises(ValueError):
            filter_trips_by_minute(TRIPS, -5)

    def test_far_minute_filters_everything(self):
        stations = make_stations([('A', 'A', 42.36, -71.09)])
        trips = make_trips([('A', 'A', '2024-03-01 00:10:00', '2024-03-01 00:20:00')])

        filtered = filter_trips_by_minute(trips, 600)
        self.assertTrue(filtered.empty)

        row = aggregate_traffic(stations, filtered).iloc[0]
        self.assertEqual((row['departures'], row['arrivals'], row['total_traffic']), (0, 0, 0))


if __name__ == '__main__':
    unittest.main()
