from datetime import datetime, timedelta
from django.utils import timezone
from rest_framework.test import APITestCase
from rest_framework import status
from .models import Doctor, Patient, Room, Appointment


class DoctorApiTests(APITestCase):
    def setUp(self):
        self.doctor1 = Doctor.objects.create(
            first_name="Juan", last_name="Carlos", age=34, email="doctor@example.com"
        )
        self.doctor2 = Doctor.objects.create(
            first_name="Carla", last_name="Matas", age=42, email="doctor2@example.com"
        )

    def test_create_valid_doctor(self):
        data = {
            "first_name": "Perla",
            "last_name": "Amalia",
            "age": 24,
            "email": "p.amalia@example.com",
        }

        response = self.client.post("/api/doctor", data, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        created = Doctor.objects.get(email="p.amalia@example.com")
        self.assertEqual(response.data, {"id": created.id, **data})

    def test_create_invalid_doctor(self):
        """Test that a doctor without a name is rejected"""
        response = self.client.post(
            "/api/doctor", {"age": 30, "email": "x@example.com"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("first_name", response.data)
        self.assertEqual(Doctor.objects.count(), 2)

    def test_get_doctor_by_id(self):
        response = self.client.get(f"/api/doctors/{self.doctor1.id}")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["first_name"], "Juan")
        self.assertEqual(response.data["last_name"], "Carlos")
        self.assertEqual(response.data["age"], 34)
        self.assertEqual(response.data["email"], "doctor@example.com")

    def test_get_missing_doctor(self):
        response = self.client.get("/api/doctors/999")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_doctors(self):
        response = self.client.get("/api/doctors")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(
            [d["email"] for d in response.data],
            ["doctor@example.com", "doctor2@example.com"],
        )

    def test_list_no_doctors(self):
        Doctor.objects.all().delete()

        response = self.client.get("/api/doctors")

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(response.content, b"")

    def test_delete_doctor_by_id(self):
        response = self.client.delete(f"/api/doctors/{self.doctor1.id}")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Doctor.objects.filter(id=self.doctor1.id).exists())
        self.assertTrue(Doctor.objects.filter(id=self.doctor2.id).exists())

    def test_delete_missing_doctor(self):
        response = self.client.delete("/api/doctors/999")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(Doctor.objects.count(), 2)

    def test_delete_all_doctors(self):
        response = self.client.delete("/api/doctors")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Doctor.objects.count(), 0)

        # Deleting an empty collection still succeeds
        response = self.client.delete("/api/doctors")
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class PatientApiTests(APITestCase):
    def setUp(self):
        self.patient1 = Patient.objects.create(
            first_name="Andrea", last_name="Perez Arroyo", age=37, email="andrea.arroyo@email.com"
        )
        self.patient2 = Patient.objects.create(
            first_name="Jose Luis", last_name="Olaya", age=37, email="j.olaya@email.com"
        )

    def test_create_valid_patient(self):
        data = {
            "first_name": "Marta",
            "last_name": "Gil",
            "age": 51,
            "email": "marta.gil@email.com",
        }

        response = self.client.post("/api/patient", data, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        created = Patient.objects.get(email="marta.gil@email.com")
        self.assertEqual(response.data, {"id": created.id, **data})

    def test_create_patient_with_invalid_email(self):
        data = {"first_name": "Marta", "last_name": "Gil", "age": 51, "email": "not-an-email"}

        response = self.client.post("/api/patient", data, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)

    def test_get_patient_by_id(self):
        response = self.client.get(f"/api/patients/{self.patient1.id}")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], self.patient1.id)
        self.assertEqual(response.data["last_name"], "Perez Arroyo")

    def test_get_missing_patient(self):
        response = self.client.get("/api/patients/999")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_patients(self):
        response = self.client.get("/api/patients")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [p["id"] for p in response.data], [self.patient1.id, self.patient2.id]
        )

    def test_list_no_patients(self):
        Patient.objects.all().delete()

        response = self.client.get("/api/patients")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_delete_patient_by_id(self):
        response = self.client.delete(f"/api/patients/{self.patient1.id}")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Patient.objects.count(), 1)

    def test_delete_missing_patient(self):
        response = self.client.delete("/api/patients/999")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_all_patients(self):
        response = self.client.delete("/api/patients")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Patient.objects.exists())


class RoomApiTests(APITestCase):
    def setUp(self):
        self.room1 = Room.objects.create(room_name="Cardiology")
        self.room2 = Room.objects.create(room_name="Oncology")

    def test_create_valid_room(self):
        response = self.client.post("/api/room", {"room_name": "Rehabilitation"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data, {"room_name": "Rehabilitation"})
        self.assertTrue(Room.objects.filter(room_name="Rehabilitation").exists())

    def test_create_room_without_name(self):
        response = self.client.post("/api/room", {"room_name": ""}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post("/api/room", {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.assertEqual(Room.objects.count(), 2)

    def test_get_room_by_name(self):
        response = self.client.get("/api/rooms/Cardiology")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"room_name": "Cardiology"})

    def test_get_missing_room(self):
        response = self.client.get("/api/rooms/Radiology")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_rooms(self):
        response = self.client.get("/api/rooms")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data, [{"room_name": "Cardiology"}, {"room_name": "Oncology"}]
        )

    def test_list_no_rooms(self):
        Room.objects.all().delete()

        response = self.client.get("/api/rooms")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_delete_room_by_name(self):
        response = self.client.delete("/api/rooms/Cardiology")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Room.objects.filter(room_name="Cardiology").exists())

    def test_delete_missing_room(self):
        response = self.client.delete("/api/rooms/Radiology")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(Room.objects.count(), 2)

    def test_delete_all_rooms(self):
        response = self.client.delete("/api/rooms")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Room.objects.count(), 0)


class AppointmentApiTests(APITestCase):
    def setUp(self):
        # Create doctor, patient and rooms
        self.doctor = Doctor.objects.create(
            first_name="Perla", last_name="Amalia", age=24, email="p.amalia@hospital.accwe"
        )
        self.patient = Patient.objects.create(
            first_name="Jose Luis", last_name="Olaya", age=37, email="j.olaya@email.com"
        )
        self.room = Room.objects.create(room_name="Dermatology")
        self.other_room = Room.objects.create(room_name="Cardiology")

        self.start = timezone.make_aware(datetime(2024, 1, 1, 10, 0, 0))

    def payload(self, start_minutes, finish_minutes, room=None):
        return {
            "patient": self.patient.id,
            "doctor": self.doctor.id,
            "room": (room or self.room).room_name,
            "starts_at": (self.start + timedelta(minutes=start_minutes)).isoformat(),
            "finishes_at": (self.start + timedelta(minutes=finish_minutes)).isoformat(),
        }

    def book(self, start_minutes, finish_minutes, room=None):
        return Appointment.objects.create(
            patient=self.patient,
            doctor=self.doctor,
            room=room or self.room,
            starts_at=self.start + timedelta(minutes=start_minutes),
            finishes_at=self.start + timedelta(minutes=finish_minutes),
        )

    def test_create_valid_appointment(self):
        response = self.client.post("/api/appointment", self.payload(0, 30), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        appointment = Appointment.objects.get()
        self.assertEqual(response.data["id"], appointment.id)
        self.assertEqual(response.data["patient"], self.patient.id)
        self.assertEqual(response.data["doctor"], self.doctor.id)
        self.assertEqual(response.data["room"], "Dermatology")
        self.assertEqual(response.data["doctor_name"], "Perla Amalia")
        self.assertEqual(appointment.starts_at, self.start)
        self.assertEqual(appointment.finishes_at, self.start + timedelta(minutes=30))

    def test_create_appointment_without_body(self):
        response = self.client.post("/api/appointment")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Appointment.objects.exists())

    def test_create_appointment_with_unknown_room(self):
        data = self.payload(0, 30)
        data["room"] = "Radiology"

        response = self.client.post("/api/appointment", data, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("room", response.data)

    def test_finish_equal_to_start_is_rejected(self):
        response = self.client.post("/api/appointment", self.payload(10, 10), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Appointment.objects.exists())

    def test_finish_before_start_is_rejected(self):
        """Test that a reversed interval fails with 400 even when it would overlap"""
        self.book(0, 60)

        response = self.client.post("/api/appointment", self.payload(30, 10), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(
            "/api/appointment", self.payload(30, 10, room=self.other_room), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.assertEqual(Appointment.objects.count(), 1)

    def test_no_double_booking(self):
        """Test that overlapping appointments in the same room are refused"""
        self.book(0, 30)

        # Partial overlap
        response = self.client.post("/api/appointment", self.payload(15, 45), format="json")
        self.assertEqual(response.status_code, status.HTTP_406_NOT_ACCEPTABLE)
        self.assertIn("Dermatology", str(response.data))

        # Same start
        response = self.client.post("/api/appointment", self.payload(0, 10), format="json")
        self.assertEqual(response.status_code, status.HTTP_406_NOT_ACCEPTABLE)

        # Same end
        response = self.client.post("/api/appointment", self.payload(20, 30), format="json")
        self.assertEqual(response.status_code, status.HTTP_406_NOT_ACCEPTABLE)

        self.assertEqual(Appointment.objects.count(), 1)

    def test_touching_appointment_is_refused(self):
        """Test that starting exactly when another appointment finishes counts as overlap"""
        self.book(0, 30)

        response = self.client.post("/api/appointment", self.payload(30, 60), format="json")

        self.assertEqual(response.status_code, status.HTTP_406_NOT_ACCEPTABLE)
        self.assertEqual(Appointment.objects.count(), 1)

    def test_disjoint_appointment_is_accepted(self):
        self.book(0, 30)

        response = self.client.post("/api/appointment", self.payload(31, 60), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Appointment.objects.count(), 2)

    def test_same_interval_in_other_room_is_accepted(self):
        self.book(0, 30)

        response = self.client.post(
            "/api/appointment", self.payload(0, 30, room=self.other_room), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Appointment.objects.filter(room=self.other_room).count(), 1)

    def test_get_appointment_by_id(self):
        appointment = self.book(0, 30)

        response = self.client.get(f"/api/appointments/{appointment.id}")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], appointment.id)
        self.assertEqual(response.data["patient_name"], "Jose Luis Olaya")

    def test_get_missing_appointment(self):
        response = self.client.get("/api/appointments/999")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_appointments(self):
        later = self.book(60, 90)
        earlier = self.book(0, 30)

        response = self.client.get("/api/appointments")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([a["id"] for a in response.data], [earlier.id, later.id])

    def test_list_no_appointments(self):
        response = self.client.get("/api/appointments")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_delete_appointment_by_id(self):
        appointment = self.book(0, 30)

        response = self.client.delete(f"/api/appointments/{appointment.id}")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Appointment.objects.exists())

    def test_delete_missing_appointment(self):
        response = self.client.delete("/api/appointments/999")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_all_appointments(self):
        self.book(0, 30)
        self.book(0, 30, room=self.other_room)

        response = self.client.delete("/api/appointments")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Appointment.objects.exists())
        self.assertTrue(Room.objects.exists())

    def test_freed_slot_can_be_booked_again(self):
        appointment = self.book(0, 30)
        self.client.delete(f"/api/appointments/{appointment.id}")

        response = self.client.post("/api/appointment", self.payload(0, 30), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
