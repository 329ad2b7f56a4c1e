from django.contrib import admin
from .models import Doctor, Patient, Room, Appointment


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ["id", "first_name", "last_name", "age", "email"]
    search_fields = ["first_name", "last_name", "email"]


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ["id", "first_name", "last_name", "age", "email"]
    search_fields = ["first_name", "last_name", "email"]


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ["room_name"]
    search_fields = ["room_name"]


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ["patient", "doctor", "room", "starts_at", "finishes_at"]
    list_filter = ["room", "starts_at", "doctor"]
    search_fields = [
        "patient__first_name",
        "patient__last_name",
        "doctor__first_name",
        "doctor__last_name",
        "room__room_name",
    ]
    date_hierarchy = "starts_at"
