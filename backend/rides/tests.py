from datetime import timedelta
from io import StringIO
from unittest.mock import Mock, patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError
from django.db.models import ProtectedError
from django.test import TestCase, TransactionTestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import User
from chairs.models import Chair, ChairLocation
from services.matching import (
	ChairCandidate,
	MatchingEngine,
	RepositoryError,
	RideChairRepository,
	select_nearest_chair,
)
from services.ride_management import (
	ActiveRideExistsError,
	InvalidStatusTransitionError,
	RideNotAssignedError,
	RideNotFoundError,
	advance_ride_status,
	create_ride,
	get_latest_status,
)
from .matching_monitor import MatchingMonitor, start_matching_monitor
from .models import Ride, RideStatus
from .notifications import notify_chair_event
from .tasks import run_matching_cycle_task


class DispatchFixtures:
	"""Shared builders for riders, chairs and rides."""

	def setUp(self):
		self.owner = User.objects.create_user(
			username='owner',
			password='owner1234',
			role='owner',
		)
		self._rider_count = 0

	def make_rider(self):
		self._rider_count += 1
		return User.objects.create_user(
			username='rider_%d' % self._rider_count,
			password='rider1234',
			role='user',
		)

	def make_chair(self, name, lat=None, lon=None, is_active=True):
		chair = Chair.objects.create(owner=self.owner, name=name, model='Rapid', is_active=is_active)
		if lat is not None:
			ChairLocation.objects.create(chair=chair, latitude=lat, longitude=lon)
		return chair

	def make_ride(self, lat, lon, created_at=None, chair=None):
		ride = Ride.objects.create(
			user=self.make_rider(),
			chair=chair,
			pickup_latitude=lat,
			pickup_longitude=lon,
			destination_latitude=lat + 10,
			destination_longitude=lon + 10,
		)
		RideStatus.objects.create(ride=ride, status=RideStatus.MATCHING)
		if created_at is not None:
			Ride.objects.filter(id=ride.id).update(created_at=created_at)
			ride.refresh_from_db()
		return ride

	def complete(self, ride):
		for status in ['ENROUTE', 'PICKUP', 'CARRYING', 'ARRIVED', 'COMPLETED']:
			advance_ride_status(ride.id, status)


class MatchingEngineTests(DispatchFixtures, TestCase):
	def test_ride_is_assigned_the_nearest_chair(self):
		ride = self.make_ride(0, 0)
		near = self.make_chair('near', 0, 1)
		self.make_chair('far', 10, 10)

		result = MatchingEngine().run_matching_cycle()

		ride.refresh_from_db()
		self.assertEqual(result.matched_count, 1)
		self.assertEqual(ride.chair, near)

	def test_no_rides_skips_chair_lookup_and_writes(self):
		repository = Mock(spec=RideChairRepository)
		repository.unmatched_rides.return_value = []

		result = MatchingEngine(repository=repository).run_matching_cycle()

		self.assertEqual(result.matched_count, 0)
		repository.eligible_chairs.assert_not_called()
		repository.try_assign_chair.assert_not_called()

	def test_no_eligible_chairs_is_a_noop(self):
		ride = self.make_ride(0, 0)
		self.make_chair('offline', 0, 0, is_active=False)
		repository = Mock(wraps=RideChairRepository())

		result = MatchingEngine(repository=repository).run_matching_cycle()

		ride.refresh_from_db()
		self.assertEqual(result.matched_count, 0)
		self.assertIsNone(ride.chair)
		repository.try_assign_chair.assert_not_called()

	def test_older_ride_wins_shared_nearest_chair(self):
		now = timezone.now()
		newer = self.make_ride(0, 0, created_at=now)
		older = self.make_ride(0, 0, created_at=now - timedelta(minutes=5))
		chair = self.make_chair('only', 1, 1)

		result = MatchingEngine().run_matching_cycle()

		older.refresh_from_db()
		newer.refresh_from_db()
		self.assertEqual(result.matched_count, 1)
		self.assertEqual(older.chair, chair)
		self.assertIsNone(newer.chair)

	def test_equal_cost_goes_to_first_registered_chair(self):
		ride = self.make_ride(0, 0)
		first = self.make_chair('first', 0, 2)
		self.make_chair('second', 2, 0)

		MatchingEngine().run_matching_cycle()

		ride.refresh_from_db()
		self.assertEqual(ride.chair, first)

	def test_chair_at_pickup_point_wins(self):
		ride = self.make_ride(5, 5)
		self.make_chair('adjacent', 5, 6)
		exact = self.make_chair('exact', 5, 5)

		MatchingEngine().run_matching_cycle()

		ride.refresh_from_db()
		self.assertEqual(ride.chair, exact)

	def test_chair_claimed_at_most_once_per_cycle(self):
		now = timezone.now()
		rides = [self.make_ride(0, 0, created_at=now + timedelta(seconds=i)) for i in range(3)]
		self.make_chair('a', 0, 1)
		self.make_chair('b', 1, 0)

		result = MatchingEngine().run_matching_cycle()

		self.assertEqual(result.matched_count, 2)
		chair_ids = [ride.chair_id for ride in Ride.objects.filter(id__in=[r.id for r in rides])]
		assigned = [chair_id for chair_id in chair_ids if chair_id is not None]
		self.assertEqual(len(assigned), 2)
		self.assertEqual(len(set(assigned)), 2)
		rides[2].refresh_from_db()
		self.assertIsNone(rides[2].chair)

	def test_each_ride_gets_nearest_remaining_chair(self):
		now = timezone.now()
		first = self.make_ride(0, 0, created_at=now)
		second = self.make_ride(0, 0, created_at=now + timedelta(seconds=1))
		closest = self.make_chair('closest', 0, 1)
		runner_up = self.make_chair('runner_up', 0, 3)
		self.make_chair('distant', 0, 8)

		MatchingEngine().run_matching_cycle()

		first.refresh_from_db()
		second.refresh_from_db()
		self.assertEqual(first.chair, closest)
		self.assertEqual(second.chair, runner_up)

	def test_ride_beyond_radius_stays_unmatched(self):
		ride = self.make_ride(0, 0)
		self.make_chair('far', 3, 3)

		result = MatchingEngine(max_radius=5).run_matching_cycle()

		ride.refresh_from_db()
		self.assertEqual(result.matched_count, 0)
		self.assertIsNone(ride.chair)

	def test_ride_exactly_at_radius_is_matched(self):
		ride = self.make_ride(0, 0)
		chair = self.make_chair('edge', 3, 3)

		result = MatchingEngine(max_radius=6).run_matching_cycle()

		ride.refresh_from_db()
		self.assertEqual(result.matched_count, 1)
		self.assertEqual(ride.chair, chair)

	def test_skipped_ride_does_not_consume_chair(self):
		now = timezone.now()
		remote = self.make_ride(100, 100, created_at=now)
		local = self.make_ride(0, 0, created_at=now + timedelta(seconds=1))
		chair = self.make_chair('local', 0, 1)

		result = MatchingEngine(max_radius=5).run_matching_cycle()

		remote.refresh_from_db()
		local.refresh_from_db()
		self.assertEqual(result.matched_count, 1)
		self.assertIsNone(remote.chair)
		self.assertEqual(local.chair, chair)

	@override_settings(MATCHING_MAX_RADIUS=1)
	def test_radius_defaults_to_settings(self):
		ride = self.make_ride(0, 0)
		self.make_chair('far', 0, 2)

		engine = MatchingEngine()
		result = engine.run_matching_cycle()

		ride.refresh_from_db()
		self.assertEqual(engine.max_radius, 1)
		self.assertEqual(result.matched_count, 0)
		self.assertIsNone(ride.chair)

	def test_failed_commit_does_not_abort_cycle(self):
		now = timezone.now()
		unlucky = self.make_ride(0, 0, created_at=now)
		lucky = self.make_ride(0, 0, created_at=now + timedelta(seconds=1))
		chair_a = self.make_chair('a', 0, 1)
		self.make_chair('b', 0, 2)

		class FlakyRepository(RideChairRepository):
			calls = 0

			def try_assign_chair(self, ride_id, chair_id):
				FlakyRepository.calls += 1
				if FlakyRepository.calls == 1:
					raise RepositoryError("write timed out")
				return super().try_assign_chair(ride_id, chair_id)

		result = MatchingEngine(repository=FlakyRepository()).run_matching_cycle()

		unlucky.refresh_from_db()
		lucky.refresh_from_db()
		self.assertEqual(result.matched_count, 1)
		self.assertIsNone(unlucky.chair)
		# the chair was never claimed, so it is still offered to the next ride
		self.assertEqual(lucky.chair, chair_a)

	def test_read_failure_propagates(self):
		repository = Mock(spec=RideChairRepository)
		repository.unmatched_rides.side_effect = RepositoryError("database unavailable")

		with self.assertRaises(RepositoryError):
			MatchingEngine(repository=repository).run_matching_cycle()

		repository.try_assign_chair.assert_not_called()

	def test_claimed_rides_are_never_reassigned(self):
		chair = self.make_chair('busy', 0, 0)
		ride = self.make_ride(0, 0, chair=chair)
		self.make_chair('idle', 0, 0)

		result = MatchingEngine().run_matching_cycle()

		ride.refresh_from_db()
		self.assertEqual(result.matched_count, 0)
		self.assertEqual(ride.chair, chair)

	def test_select_nearest_chair_prefers_first_on_tie(self):
		ride = Ride(pickup_latitude=0, pickup_longitude=0)
		chairs = [
			ChairCandidate(chair_id=1, latitude=3, longitude=0),
			ChairCandidate(chair_id=2, latitude=1, longitude=1),
			ChairCandidate(chair_id=3, latitude=0, longitude=2),
		]

		self.assertEqual(select_nearest_chair(ride, chairs), (1, 2.0))


class RepositoryTests(DispatchFixtures, TestCase):
	def setUp(self):
		super().setUp()
		self.repository = RideChairRepository()

	def test_unmatched_rides_oldest_first_and_unassigned_only(self):
		now = timezone.now()
		chair = self.make_chair('busy', 0, 0)
		newest = self.make_ride(0, 0, created_at=now)
		oldest = self.make_ride(0, 0, created_at=now - timedelta(minutes=2))
		self.make_ride(0, 0, created_at=now - timedelta(minutes=5), chair=chair)

		rides = self.repository.unmatched_rides()

		self.assertEqual([ride.id for ride in rides], [oldest.id, newest.id])

	def test_eligible_chairs_skips_inactive_and_unlocated(self):
		active = self.make_chair('active', 1, 2)
		self.make_chair('inactive', 1, 2, is_active=False)
		self.make_chair('never_reported')

		chairs = self.repository.eligible_chairs()

		self.assertEqual(chairs, [ChairCandidate(chair_id=active.id, latitude=1.0, longitude=2.0)])

	def test_eligible_chairs_use_latest_location(self):
		chair = self.make_chair('mover', 0, 0)
		newest = ChairLocation.objects.create(chair=chair, latitude=7, longitude=8)
		ChairLocation.objects.filter(id=newest.id).update(created_at=timezone.now() + timedelta(seconds=5))

		chairs = self.repository.eligible_chairs()

		self.assertEqual(len(chairs), 1)
		self.assertEqual((chairs[0].latitude, chairs[0].longitude), (7.0, 8.0))

	def test_chair_serving_incomplete_ride_is_not_eligible(self):
		chair = self.make_chair('serving', 0, 0)
		ride = self.make_ride(0, 0, chair=chair)

		self.assertEqual(self.repository.eligible_chairs(), [])

		self.complete(ride)

		self.assertEqual([c.chair_id for c in self.repository.eligible_chairs()], [chair.id])

	def test_eligible_chairs_in_registration_order(self):
		first = self.make_chair('first', 5, 5)
		second = self.make_chair('second', 0, 0)

		chairs = self.repository.eligible_chairs()

		self.assertEqual([c.chair_id for c in chairs], [first.id, second.id])

	def test_read_database_error_becomes_repository_error(self):
		with patch.object(Ride.objects, 'filter', side_effect=DatabaseError('connection lost')):
			with self.assertRaises(RepositoryError):
				self.repository.unmatched_rides()

	def test_try_assign_rejects_already_claimed_ride(self):
		first = self.make_chair('first', 0, 0)
		second = self.make_chair('second', 0, 0)
		ride = self.make_ride(0, 0)

		self.assertTrue(self.repository.try_assign_chair(ride.id, first.id))
		self.assertFalse(self.repository.try_assign_chair(ride.id, second.id))

		ride.refresh_from_db()
		self.assertEqual(ride.chair, first)

	def test_try_assign_rejects_busy_chair(self):
		chair = self.make_chair('busy', 0, 0)
		self.make_ride(0, 0, chair=chair)
		waiting = self.make_ride(0, 0)

		self.assertFalse(self.repository.try_assign_chair(waiting.id, chair.id))

		waiting.refresh_from_db()
		self.assertIsNone(waiting.chair)

	def test_try_assign_rejects_deactivated_chair(self):
		chair = self.make_chair('gone', 0, 0, is_active=False)
		ride = self.make_ride(0, 0)

		self.assertFalse(self.repository.try_assign_chair(ride.id, chair.id))

	def test_write_database_error_becomes_repository_error(self):
		chair = self.make_chair('a', 0, 0)
		ride = self.make_ride(0, 0)

		with patch.object(RideChairRepository, '_claim', side_effect=DatabaseError('deadlock')):
			with self.assertRaises(RepositoryError):
				self.repository.try_assign_chair(ride.id, chair.id)

	def test_chair_is_notified_after_commit(self):
		chair = self.make_chair('a', 0, 0)
		ride = self.make_ride(0, 0)

		with patch('rides.notifications.notify_chair_event') as mock_notify:
			with self.captureOnCommitCallbacks(execute=True):
				self.repository.try_assign_chair(ride.id, chair.id)

		mock_notify.assert_called_once()
		notified_ride = mock_notify.call_args[0][1]
		self.assertEqual(mock_notify.call_args[0][0], 'ride_matched')
		self.assertEqual(notified_ride.id, ride.id)
		self.assertEqual(notified_ride.chair_id, chair.id)


class SnapshotRepository(RideChairRepository):
	"""Serves reads captured earlier, as a cycle racing another one would see them."""

	def __init__(self, rides, chairs):
		self._rides = rides
		self._chairs = chairs

	def unmatched_rides(self):
		return list(self._rides)

	def eligible_chairs(self):
		return list(self._chairs)


class ConcurrentCycleTests(DispatchFixtures, TestCase):
	def test_racing_cycles_claim_shared_chair_once(self):
		now = timezone.now()
		first = self.make_ride(0, 0, created_at=now)
		second = self.make_ride(0, 0, created_at=now + timedelta(seconds=1))
		chair = self.make_chair('shared', 0, 1)

		# Cycle B read its snapshot before cycle A committed, and only saw the second ride
		stale = SnapshotRepository(
			rides=[second],
			chairs=RideChairRepository().eligible_chairs(),
		)
		result_a = MatchingEngine().run_matching_cycle()
		result_b = MatchingEngine(repository=stale).run_matching_cycle()

		first.refresh_from_db()
		second.refresh_from_db()
		self.assertEqual(result_a.matched_count + result_b.matched_count, 1)
		self.assertEqual(first.chair, chair)
		self.assertIsNone(second.chair)
		self.assertEqual(Ride.objects.filter(chair=chair).count(), 1)

	def test_racing_cycles_claim_same_ride_once(self):
		ride = self.make_ride(0, 0)
		self.make_chair('a', 0, 1)
		self.make_chair('b', 0, 2)

		repository = RideChairRepository()
		stale = SnapshotRepository(rides=repository.unmatched_rides(), chairs=repository.eligible_chairs())
		result_a = MatchingEngine().run_matching_cycle()
		result_b = MatchingEngine(repository=stale).run_matching_cycle()

		self.assertEqual(result_a.matched_count, 1)
		self.assertEqual(result_b.matched_count, 0)
		ride.refresh_from_db()
		self.assertEqual(ride.chair.name, 'a')

	def test_chair_rejected_for_taken_ride_stays_available(self):
		now = timezone.now()
		first = self.make_ride(0, 0, created_at=now)
		second = self.make_ride(0, 0, created_at=now + timedelta(seconds=1))
		free = self.make_chair('free', 0, 1)

		stale = SnapshotRepository(
			rides=RideChairRepository().unmatched_rides(),
			chairs=RideChairRepository().eligible_chairs(),
		)
		# Another cycle booked the first ride onto a chair this snapshot never saw
		other = self.make_chair('other', 5, 5)
		Ride.objects.filter(id=first.id).update(chair=other)

		result = MatchingEngine(repository=stale).run_matching_cycle()

		first.refresh_from_db()
		second.refresh_from_db()
		self.assertEqual(result.matched_count, 1)
		self.assertEqual(first.chair, other)
		self.assertEqual(second.chair, free)

	def test_deleting_chair_keeps_its_rides_claimed(self):
		chair = self.make_chair('busy', 0, 0)
		ride = self.make_ride(0, 0, chair=chair)

		with self.assertRaises(ProtectedError):
			chair.delete()

		ride.refresh_from_db()
		self.assertEqual(ride.chair, chair)
		self.assertNotIn(ride.id, [r.id for r in RideChairRepository().unmatched_rides()])


class RideLifecycleTests(DispatchFixtures, TestCase):
	def test_create_ride_starts_in_matching(self):
		rider = self.make_rider()

		result = create_ride(rider, 1, 2, 3, 4)

		self.assertTrue(result.success)
		self.assertIsNone(result.ride.chair)
		self.assertEqual(get_latest_status(result.ride), RideStatus.MATCHING)

	def test_rider_cannot_hold_two_active_rides(self):
		rider = self.make_rider()
		create_ride(rider, 1, 2, 3, 4)

		with self.assertRaises(ActiveRideExistsError):
			create_ride(rider, 1, 2, 3, 4)

	def test_status_requires_assigned_chair(self):
		ride = self.make_ride(0, 0)

		with self.assertRaises(RideNotAssignedError):
			advance_ride_status(ride.id, RideStatus.ENROUTE)

	def test_status_must_follow_order(self):
		chair = self.make_chair('a', 0, 0)
		ride = self.make_ride(0, 0, chair=chair)

		with self.assertRaises(InvalidStatusTransitionError):
			advance_ride_status(ride.id, RideStatus.CARRYING)

	def test_unknown_ride(self):
		with self.assertRaises(RideNotFoundError):
			advance_ride_status(999999, RideStatus.ENROUTE)

	def test_completed_ride_frees_chair_for_next_cycle(self):
		rider = self.make_rider()
		chair = self.make_chair('a', 0, 0)
		ride = create_ride(rider, 0, 0, 5, 5).ride
		MatchingEngine().run_matching_cycle()
		ride.refresh_from_db()
		self.assertEqual(ride.chair, chair)

		waiting = self.make_ride(0, 0)
		self.assertEqual(MatchingEngine().run_matching_cycle().matched_count, 0)

		self.complete(ride)
		rider.refresh_from_db()
		self.assertEqual(rider.completed_rides, 1)

		self.assertEqual(MatchingEngine().run_matching_cycle().matched_count, 1)
		waiting.refresh_from_db()
		self.assertEqual(waiting.chair, chair)

		# the rider may book again once the previous ride is complete
		self.assertTrue(create_ride(rider, 0, 0, 1, 1).success)


class MatchingTriggerTests(DispatchFixtures, TestCase):
	def test_run_matching_command(self):
		ride = self.make_ride(0, 0)
		chair = self.make_chair('a', 0, 1)
		out = StringIO()

		call_command('run_matching', stdout=out)

		ride.refresh_from_db()
		self.assertEqual(ride.chair, chair)
		self.assertIn('Matched 1 ride(s).', out.getvalue())

	def test_run_matching_command_respects_radius(self):
		ride = self.make_ride(0, 0)
		self.make_chair('a', 4, 4)
		out = StringIO()

		call_command('run_matching', max_radius=2, stdout=out)

		ride.refresh_from_db()
		self.assertIsNone(ride.chair)
		self.assertIn('Matched 0 ride(s).', out.getvalue())

	@patch('rides.management.commands.run_matching.time.sleep', side_effect=KeyboardInterrupt)
	def test_run_matching_loop_honours_zero_interval(self, mock_sleep):
		out = StringIO()

		call_command('run_matching', loop=True, interval=0, stdout=out)

		mock_sleep.assert_called_once_with(0)
		self.assertIn('Running matching every 0', out.getvalue())

	@patch('rides.management.commands.run_matching.run_matching_cycle', side_effect=RepositoryError('down'))
	def test_run_matching_command_reports_read_failure(self, mock_cycle):
		with self.assertRaises(CommandError):
			call_command('run_matching', stdout=StringIO())

	def test_celery_task_runs_cycle(self):
		self.make_ride(0, 0)
		self.make_chair('a', 0, 1)

		self.assertEqual(run_matching_cycle_task(), 1)

	@patch('services.matching.run_matching_cycle', side_effect=RepositoryError('down'))
	def test_celery_task_swallows_read_failure(self, mock_cycle):
		self.assertEqual(run_matching_cycle_task(), 0)
		mock_cycle.assert_called_once()

	def test_internal_matching_endpoint(self):
		ride = self.make_ride(0, 0)
		chair = self.make_chair('a', 0, 1)

		response = APIClient().get('/api/internal/matching')

		self.assertEqual(response.status_code, 204)
		ride.refresh_from_db()
		self.assertEqual(ride.chair, chair)

	@patch('rides.views.run_matching_cycle', side_effect=RepositoryError('down'))
	def test_internal_matching_endpoint_read_failure(self, mock_cycle):
		response = APIClient().get('/api/internal/matching')

		self.assertEqual(response.status_code, 500)

	@patch('rides.matching_monitor.close_old_connections')
	def test_monitor_run_once(self, mock_close):
		ride = self.make_ride(0, 0)
		self.make_chair('a', 3, 3)

		self.assertEqual(MatchingMonitor(interval_seconds=1, max_radius=1).run_once(), 0)
		self.assertEqual(MatchingMonitor(interval_seconds=1).run_once(), 1)

		ride.refresh_from_db()
		self.assertIsNotNone(ride.chair)
		self.assertEqual(mock_close.call_count, 2)

	@override_settings(ENABLE_MATCHING_MONITOR=False)
	def test_monitor_disabled_by_default(self):
		self.assertIsNone(start_matching_monitor())


class ChairNotificationTests(DispatchFixtures, TestCase):
	@patch('rides.notifications.async_to_sync')
	def test_notify_chair_event_targets_chair_group(self, mock_async_to_sync):
		chair = self.make_chair('a', 0, 0)
		ride = self.make_ride(0, 0, chair=chair)

		self.assertTrue(notify_chair_event('ride_matched', ride, 'hello'))

		group, payload = mock_async_to_sync.return_value.call_args[0]
		self.assertEqual(group, 'chair_%d' % chair.id)
		self.assertEqual(payload['type'], 'ride_matched')
		self.assertEqual(payload['ride_id'], ride.id)
		self.assertEqual(payload['message'], 'hello')

	@patch('rides.notifications.async_to_sync')
	def test_unassigned_ride_is_not_notified(self, mock_async_to_sync):
		ride = self.make_ride(0, 0)

		self.assertFalse(notify_chair_event('ride_matched', ride))
		mock_async_to_sync.assert_not_called()


class HealthCheckTests(TestCase):
	@patch('app_backend.views.redis.Redis')
	def test_health_reports_each_service(self, mock_redis):
		response = APIClient().get('/health/')

		services = response.data['services']
		self.assertEqual(services['database'], 'healthy')
		self.assertEqual(services['redis'], 'healthy')
		self.assertEqual(services['channels'], 'healthy')
		mock_redis.return_value.ping.assert_called_once()

	@patch('app_backend.views.redis.Redis')
	def test_unreachable_redis_is_unhealthy(self, mock_redis):
		mock_redis.return_value.ping.side_effect = ConnectionError('refused')

		response = APIClient().get('/health/')

		self.assertEqual(response.status_code, 503)
		self.assertEqual(response.data['status'], 'unhealthy')
		self.assertTrue(response.data['services']['redis'].startswith('unhealthy'))


class MatchNotificationFailureTests(DispatchFixtures, TransactionTestCase):
	"""Commit hooks run for real here, outside a wrapping test transaction."""

	@patch('rides.notifications.notify_chair_event', side_effect=RuntimeError('layer down'))
	def test_failed_notification_does_not_abort_cycle(self, mock_notify):
		now = timezone.now()
		first = self.make_ride(0, 0, created_at=now)
		second = self.make_ride(0, 0, created_at=now + timedelta(seconds=1))
		chair_a = self.make_chair('a', 0, 1)
		chair_b = self.make_chair('b', 0, 2)

		result = MatchingEngine().run_matching_cycle()

		first.refresh_from_db()
		second.refresh_from_db()
		self.assertEqual(result.matched_count, 2)
		self.assertEqual(first.chair, chair_a)
		self.assertEqual(second.chair, chair_b)
		self.assertEqual(mock_notify.call_count, 2)

	@patch('rides.notifications.notify_chair_event', side_effect=RuntimeError('layer down'))
	def test_failed_notification_still_reports_claim(self, mock_notify):
		ride = self.make_ride(0, 0)
		chair = self.make_chair('a', 0, 1)

		self.assertTrue(RideChairRepository().try_assign_chair(ride.id, chair.id))

		ride.refresh_from_db()
		self.assertEqual(ride.chair, chair)
		mock_notify.assert_called_once()
