from django.db import models
from django.core.exceptions import ValidationError

from .conflicts import intervals_overlap


class Doctor(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    age = models.PositiveIntegerField()
    email = models.EmailField()

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"Dr. {self.get_full_name()}"

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}"


class Patient(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    age = models.PositiveIntegerField()
    email = models.EmailField()

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.get_full_name()

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}"


class Room(models.Model):
    room_name = models.CharField(max_length=100, primary_key=True)

    class Meta:
        ordering = ["room_name"]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(room_name=""), name="room_name_not_empty"
            )
        ]

    def __str__(self):
        return self.room_name


class Appointment(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE)
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE)
    room = models.ForeignKey(Room, on_delete=models.CASCADE)
    starts_at = models.DateTimeField()
    finishes_at = models.DateTimeField()

    class Meta:
        ordering = ["starts_at"]

    def __str__(self):
        return f"{self.patient} with {self.doctor} in {self.room_id} at {self.starts_at}"

    def has_valid_interval(self):
        return self.finishes_at > self.starts_at

    def overlaps(self, other):
        """True when both appointments use the same room and their intervals touch or intersect"""
        if self.room_id != other.room_id:
            return False
        return intervals_overlap(
            self.starts_at, self.finishes_at, other.starts_at, other.finishes_at
        )

    def clean(self):
        """Validate that the appointment finishes strictly after it starts"""
        super().clean()

        if self.starts_at and self.finishes_at and not self.has_valid_interval():
            raise ValidationError(
                f"Appointment must finish after it starts "
                f"(starts at {self.starts_at}, finishes at {self.finishes_at})."
            )
