from rest_framework import serializers

from .models import Ride, RideStatus


class RideStatusSerializer(serializers.ModelSerializer):
    """Serializer for one entry in a ride's status history"""

    class Meta:
        model = RideStatus
        fields = ['status', 'created_at']


class RideSerializer(serializers.ModelSerializer):
    """Serializer for rides pushed to chairs"""
    statuses = RideStatusSerializer(many=True, read_only=True)

    class Meta:
        model = Ride
        fields = ['id', 'user', 'chair', 'pickup_latitude', 'pickup_longitude',
                  'destination_latitude', 'destination_longitude',
                  'statuses', 'created_at', 'updated_at']
        read_only_fields = fields
