from rest_framework import serializers
from django.core.exceptions import ValidationError
from .models import Doctor, Patient, Room, Appointment


class DoctorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Doctor
        fields = ["id", "first_name", "last_name", "age", "email"]


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = ["id", "first_name", "last_name", "age", "email"]


class RoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["room_name"]


class AppointmentSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source="patient.get_full_name", read_only=True)
    doctor_name = serializers.CharField(source="doctor.get_full_name", read_only=True)

    class Meta:
        model = Appointment
        fields = [
            "id",
            "patient",
            "doctor",
            "room",
            "starts_at",
            "finishes_at",
            "patient_name",
            "doctor_name",
        ]

    def validate(self, data):
        """Reject intervals that do not finish strictly after they start"""
        instance = Appointment(**data)
        try:
            instance.clean()
        except ValidationError as e:
            raise serializers.ValidationError(e.messages)

        return data
