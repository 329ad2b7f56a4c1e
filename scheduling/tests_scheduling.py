"""
Test coverage for entities and the room overlap rule
"""

from datetime import datetime, timedelta
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from .conflicts import find_overlapping, intervals_overlap
from .models import Doctor, Patient, Room, Appointment


class EntityTests(TestCase):
    """Test entity attributes and persistence without API calls"""

    def setUp(self):
        self.doctor = Doctor(
            first_name="Perla", last_name="Amalia", age=24, email="p.amalia@hospital.accwe"
        )
        self.patient = Patient(
            first_name="Jose Luis", last_name="Olaya", age=37, email="j.olaya@email.com"
        )
        self.room = Room(room_name="Rehabilitation")
        self.start = timezone.make_aware(datetime(2024, 1, 1, 10, 0, 0))

    def test_doctor_attributes(self):
        """Test that doctor fields can be changed in place"""
        self.doctor.id = 2
        self.doctor.first_name = "Carlos"
        self.doctor.last_name = "Perez"
        self.doctor.age = 45
        self.doctor.email = "email.changed@example.es"

        self.assertEqual(self.doctor.id, 2)
        self.assertEqual(self.doctor.first_name, "Carlos")
        self.assertEqual(self.doctor.last_name, "Perez")
        self.assertEqual(self.doctor.age, 45)
        self.assertEqual(self.doctor.email, "email.changed@example.es")
        self.assertEqual(str(self.doctor), "Dr. Carlos Perez")

    def test_doctor_persistence(self):
        """Test that a saved doctor is found again with the same fields"""
        self.doctor.save()
        found = Doctor.objects.get(pk=self.doctor.pk)

        self.assertEqual(found, self.doctor)
        self.assertEqual(found.first_name, self.doctor.first_name)
        self.assertEqual(found.last_name, self.doctor.last_name)
        self.assertEqual(found.age, self.doctor.age)
        self.assertEqual(found.email, self.doctor.email)

    def test_doctor_update_in_place(self):
        self.doctor.save()
        self.doctor.email = "new.address@hospital.accwe"
        self.doctor.save()

        self.assertEqual(
            Doctor.objects.get(pk=self.doctor.pk).email, "new.address@hospital.accwe"
        )
        self.assertEqual(Doctor.objects.count(), 1)

    def test_patient_attributes(self):
        """Test that patient fields can be changed in place"""
        self.patient.id = 1
        self.patient.first_name = "Juan"
        self.patient.last_name = "Carlos"
        self.patient.age = 34
        self.patient.email = "email.changed@example.es"

        self.assertEqual(self.patient.id, 1)
        self.assertEqual(self.patient.first_name, "Juan")
        self.assertEqual(self.patient.last_name, "Carlos")
        self.assertEqual(self.patient.age, 34)
        self.assertEqual(self.patient.email, "email.changed@example.es")
        self.assertEqual(str(self.patient), "Juan Carlos")

    def test_patient_persistence(self):
        self.patient.save()
        found = Patient.objects.get(pk=self.patient.pk)

        self.assertEqual(found, self.patient)
        self.assertEqual(found.first_name, "Jose Luis")
        self.assertEqual(found.age, 37)

    def test_room_name_is_key(self):
        self.assertEqual(self.room.room_name, "Rehabilitation")
        self.assertEqual(self.room.pk, "Rehabilitation")

    def test_room_persistence(self):
        """Test that a room is found by name and an unnamed room cannot be stored"""
        self.room.save()
        found = Room.objects.get(pk="Rehabilitation")
        self.assertEqual(found, self.room)

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Room().save()

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Room.objects.create(room_name="")

        self.assertEqual(Room.objects.count(), 1)

    def test_appointment_attributes(self):
        appointment = Appointment(
            patient=self.patient,
            doctor=self.doctor,
            room=self.room,
            starts_at=self.start,
            finishes_at=self.start + timedelta(hours=1),
        )
        new_start = self.start + timedelta(days=1)

        appointment.id = 1
        appointment.starts_at = new_start
        appointment.finishes_at = new_start + timedelta(hours=1)

        self.assertEqual(appointment.id, 1)
        self.assertEqual(appointment.doctor, self.doctor)
        self.assertEqual(appointment.patient, self.patient)
        self.assertEqual(appointment.room, self.room)
        self.assertEqual(appointment.starts_at, new_start)
        self.assertEqual(appointment.finishes_at, new_start + timedelta(hours=1))

    def test_appointment_persistence(self):
        self.doctor.save()
        self.patient.save()
        self.room.save()
        appointment = Appointment.objects.create(
            patient=self.patient,
            doctor=self.doctor,
            room=self.room,
            starts_at=self.start,
            finishes_at=self.start + timedelta(hours=1),
        )

        found = Appointment.objects.get(pk=appointment.pk)
        self.assertEqual(found, appointment)
        self.assertEqual(found.room_id, "Rehabilitation")
        self.assertEqual(found.finishes_at, self.start + timedelta(hours=1))

    def test_deleting_room_removes_its_appointments(self):
        self.doctor.save()
        self.patient.save()
        self.room.save()
        Appointment.objects.create(
            patient=self.patient,
            doctor=self.doctor,
            room=self.room,
            starts_at=self.start,
            finishes_at=self.start + timedelta(hours=1),
        )

        self.room.delete()

        self.assertFalse(Appointment.objects.exists())
        self.assertTrue(Doctor.objects.exists())

    def test_clean_rejects_non_positive_interval(self):
        """Test that an appointment must finish strictly after it starts"""
        equal = Appointment(
            patient=self.patient,
            doctor=self.doctor,
            room=self.room,
            starts_at=self.start,
            finishes_at=self.start,
        )
        with self.assertRaises(ValidationError):
            equal.clean()

        reversed_interval = Appointment(
            patient=self.patient,
            doctor=self.doctor,
            room=self.room,
            starts_at=self.start,
            finishes_at=self.start - timedelta(minutes=5),
        )
        with self.assertRaises(ValidationError):
            reversed_interval.clean()

        valid = Appointment(
            patient=self.patient,
            doctor=self.doctor,
            room=self.room,
            starts_at=self.start,
            finishes_at=self.start + timedelta(minutes=1),
        )
        valid.clean()
        self.assertTrue(valid.has_valid_interval())


class AppointmentOverlapTests(SimpleTestCase):
    """Test the overlap rule on unsaved appointments"""

    def setUp(self):
        self.doctor = Doctor(
            first_name="Perla", last_name="Amalia", age=24, email="p.amalia@hospital.accwe"
        )
        self.patient = Patient(
            first_name="Jose Luis", last_name="Olaya", age=37, email="j.olaya@email.com"
        )
        self.room = Room(room_name="Rehabilitation")
        self.start = timezone.make_aware(datetime(2024, 1, 1, 10, 0, 0))

    def appointment(self, start_minutes, finish_minutes, room=None):
        return Appointment(
            patient=self.patient,
            doctor=self.doctor,
            room=room or self.room,
            starts_at=self.start + timedelta(minutes=start_minutes),
            finishes_at=self.start + timedelta(minutes=finish_minutes),
        )

    def test_non_overlapping_appointments(self):
        first = self.appointment(0, 20)
        second = self.appointment(21, 40)

        self.assertFalse(first.overlaps(second))
        self.assertFalse(second.overlaps(first))

    def test_non_overlapping_in_distinct_rooms(self):
        cardiology = Room(room_name="Cardiology")
        first = self.appointment(0, 20)
        second = self.appointment(10, 30, room=cardiology)

        self.assertFalse(first.overlaps(second))
        self.assertFalse(second.overlaps(first))

    def test_same_interval_in_distinct_rooms(self):
        first = self.appointment(0, 20)
        second = self.appointment(0, 20, room=Room(room_name="Oncology"))

        self.assertFalse(first.overlaps(second))

    def test_overlapping_appointments_with_same_start(self):
        first = self.appointment(0, 20)
        second = self.appointment(0, 30)

        self.assertTrue(first.overlaps(second))
        self.assertTrue(second.overlaps(first))

    def test_overlapping_appointments_with_same_end(self):
        first = self.appointment(0, 20)
        second = self.appointment(1, 20)

        self.assertTrue(first.overlaps(second))
        self.assertTrue(second.overlaps(first))

    def test_touching_appointments_overlap(self):
        """Sharing a single boundary instant counts as overlapping"""
        first = self.appointment(0, 20)
        second = self.appointment(20, 40)

        self.assertTrue(first.overlaps(second))
        self.assertTrue(second.overlaps(first))

    def test_appointment_overlaps_interval(self):
        first = self.appointment(0, 20)
        second = self.appointment(10, 30)

        self.assertTrue(first.overlaps(second))
        self.assertTrue(second.overlaps(first))

    def test_contained_appointment_overlaps(self):
        outer = self.appointment(0, 60)
        inner = self.appointment(15, 30)

        self.assertTrue(outer.overlaps(inner))
        self.assertTrue(inner.overlaps(outer))

    def test_find_overlapping_returns_first_match(self):
        existing = [
            self.appointment(0, 10),
            self.appointment(30, 40, room=Room(room_name="Cardiology")),
            self.appointment(30, 50),
            self.appointment(45, 60),
        ]
        candidate = self.appointment(35, 38)

        self.assertIs(find_overlapping(candidate, existing), existing[2])

    def test_find_overlapping_returns_none_when_free(self):
        existing = [self.appointment(0, 10), self.appointment(50, 60)]

        self.assertIsNone(find_overlapping(self.appointment(20, 40), existing))
        self.assertIsNone(find_overlapping(self.appointment(20, 40), []))


class IntervalOverlapTests(SimpleTestCase):
    def setUp(self):
        self.t = timezone.make_aware(datetime(2024, 3, 4, 9, 0, 0))

    def at(self, minutes):
        return self.t + timedelta(minutes=minutes)

    def test_matches_inclusive_definition(self):
        """overlap iff not (a.finish < b.start or a.start > b.finish)"""
        bounds = [0, 10, 20, 30, 40]
        for a_start in bounds:
            for a_finish in bounds:
                if a_finish <= a_start:
                    continue
                for b_start in bounds:
                    for b_finish in bounds:
                        if b_finish <= b_start:
                            continue
                        expected = not (a_finish < b_start or a_start > b_finish)
                        result = intervals_overlap(
                            self.at(a_start), self.at(a_finish),
                            self.at(b_start), self.at(b_finish),
                        )
                        self.assertEqual(result, expected)
                        # symmetric
                        self.assertEqual(
                            result,
                            intervals_overlap(
                                self.at(b_start), self.at(b_finish),
                                self.at(a_start), self.at(a_finish),
                            ),
                        )

    def test_disjoint_intervals(self):
        self.assertFalse(intervals_overlap(self.at(0), self.at(10), self.at(11), self.at(20)))
        self.assertFalse(intervals_overlap(self.at(11), self.at(20), self.at(0), self.at(10)))

    def test_shared_boundary(self):
        self.assertTrue(intervals_overlap(self.at(0), self.at(10), self.at(10), self.at(20)))
        self.assertTrue(intervals_overlap(self.at(10), self.at(20), self.at(0), self.at(10)))
