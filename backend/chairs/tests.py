from datetime import timedelta
from decimal import Decimal

from django.core.cache import cache
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone

from accounts.models import User
from common.utils import calculate_distance, total_path_distance
from .models import Chair, ChairLocation
from .services import (
	TOTAL_DISTANCE_CACHE_KEY,
	get_chair_total_distance,
	get_current_location,
	record_chair_location,
	set_chair_active,
)


class DistanceTests(SimpleTestCase):
	def test_manhattan_distance(self):
		self.assertEqual(calculate_distance(0, 0, 0, 1), 1.0)
		self.assertEqual(calculate_distance(0, 0, 10, 10), 20.0)

	def test_distance_is_symmetric_and_non_negative(self):
		self.assertEqual(calculate_distance(3, -4, -1, 2), 10.0)
		self.assertEqual(calculate_distance(-1, 2, 3, -4), 10.0)

	def test_same_point_costs_zero(self):
		self.assertEqual(calculate_distance(35.5, 139.7, 35.5, 139.7), 0.0)

	def test_accepts_decimal_coordinates(self):
		self.assertAlmostEqual(
			calculate_distance(Decimal('1.250000'), Decimal('2.5'), 1, 2),
			0.75,
		)

	def test_total_path_distance(self):
		self.assertEqual(total_path_distance([]), 0.0)
		self.assertEqual(total_path_distance([(5, 5)]), 0.0)
		self.assertEqual(total_path_distance([(0, 0), (0, 3), (2, 3), (0, 0)]), 10.0)


class ChairServiceTests(TestCase):
	def setUp(self):
		cache.clear()
		self.owner = User.objects.create_user(
			username='owner',
			password='owner1234',
			role='owner',
		)
		self.chair = Chair.objects.create(owner=self.owner, name='Chair-1', model='Rapid')

	def test_chairs_start_inactive(self):
		self.assertFalse(self.chair.is_active)

	def test_set_chair_active(self):
		set_chair_active(self.chair, True)
		self.chair.refresh_from_db()
		self.assertTrue(self.chair.is_active)

		set_chair_active(self.chair, False)
		self.chair.refresh_from_db()
		self.assertFalse(self.chair.is_active)

	def test_no_location_until_first_sample(self):
		self.assertIsNone(get_current_location(self.chair))

	def test_latest_sample_is_current_location(self):
		record_chair_location(self.chair, 1, 1)
		latest = record_chair_location(self.chair, 4, 2)
		ChairLocation.objects.filter(id=latest.id).update(created_at=timezone.now() + timedelta(seconds=1))

		current = get_current_location(self.chair)

		self.assertEqual(current.id, latest.id)
		self.assertEqual((current.latitude, current.longitude), (Decimal('4'), Decimal('2')))

	def test_total_distance_sums_consecutive_samples(self):
		record_chair_location(self.chair, 0, 0)
		record_chair_location(self.chair, 0, 5)
		record_chair_location(self.chair, 3, 5)

		self.assertEqual(get_chair_total_distance(self.chair.id), 8.0)

	def test_total_distance_is_cached(self):
		record_chair_location(self.chair, 0, 0)
		record_chair_location(self.chair, 2, 0)
		self.assertEqual(get_chair_total_distance(self.chair.id), 2.0)

		# Samples written behind the service's back are only seen after expiry
		ChairLocation.objects.create(chair=self.chair, latitude=2, longitude=7)
		self.assertEqual(get_chair_total_distance(self.chair.id), 2.0)

		cache.delete(TOTAL_DISTANCE_CACHE_KEY.format(chair_id=self.chair.id))
		self.assertEqual(get_chair_total_distance(self.chair.id), 9.0)

	def test_recording_location_invalidates_cached_total(self):
		record_chair_location(self.chair, 0, 0)
		self.assertEqual(get_chair_total_distance(self.chair.id), 0.0)

		record_chair_location(self.chair, 1, 1)

		self.assertEqual(get_chair_total_distance(self.chair.id), 2.0)

	@override_settings(CHAIR_DISTANCE_CACHE_TTL=0)
	def test_zero_ttl_disables_caching(self):
		record_chair_location(self.chair, 0, 0)
		self.assertEqual(get_chair_total_distance(self.chair.id), 0.0)

		ChairLocation.objects.create(chair=self.chair, latitude=0, longitude=4)

		self.assertEqual(get_chair_total_distance(self.chair.id), 4.0)
