import logging

from rest_framework import generics, status
from rest_framework.response import Response
from .models import Doctor, Patient, Room, Appointment
from .serializers import (
    DoctorSerializer,
    PatientSerializer,
    RoomSerializer,
    AppointmentSerializer,
)
from .conflicts import find_overlapping
from .exceptions import AppointmentOverlapError

logger = logging.getLogger(__name__)


# Generic entity views
class EntityCollectionView(generics.GenericAPIView):
    """List every stored entity, or delete all of them"""

    def get(self, request, *args, **kwargs):
        queryset = self.get_queryset()
        if not queryset.exists():
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

    def delete(self, request, *args, **kwargs):
        deleted, _ = self.get_queryset().delete()
        logger.info(
            f"Deleted all {self.queryset.model._meta.verbose_name_plural} ({deleted} rows)"
        )
        return Response(status=status.HTTP_200_OK)


class EntityDetailView(generics.RetrieveDestroyAPIView):
    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        logger.info(f"Deleted {instance._meta.verbose_name} {instance.pk}")
        return Response(status=status.HTTP_200_OK)


class EntityCreateView(generics.CreateAPIView):
    def perform_create(self, serializer):
        instance = serializer.save()
        logger.info(f"Created {instance._meta.verbose_name} {instance.pk}")


# Doctor Views
class DoctorListView(EntityCollectionView):
    queryset = Doctor.objects.all()
    serializer_class = DoctorSerializer


class DoctorDetailView(EntityDetailView):
    queryset = Doctor.objects.all()
    serializer_class = DoctorSerializer


class DoctorCreateView(EntityCreateView):
    queryset = Doctor.objects.all()
    serializer_class = DoctorSerializer


# Patient Views
class PatientListView(EntityCollectionView):
    queryset = Patient.objects.all()
    serializer_class = PatientSerializer


class PatientDetailView(EntityDetailView):
    queryset = Patient.objects.all()
    serializer_class = PatientSerializer


class PatientCreateView(EntityCreateView):
    queryset = Patient.objects.all()
    serializer_class = PatientSerializer


# Room Views - looked up by name
class RoomListView(EntityCollectionView):
    queryset = Room.objects.all()
    serializer_class = RoomSerializer


class RoomDetailView(EntityDetailView):
    queryset = Room.objects.all()
    serializer_class = RoomSerializer
    lookup_field = "room_name"


class RoomCreateView(EntityCreateView):
    queryset = Room.objects.all()
    serializer_class = RoomSerializer


# Appointment Views
class AppointmentListView(EntityCollectionView):
    queryset = Appointment.objects.select_related("patient", "doctor")
    serializer_class = AppointmentSerializer


class AppointmentDetailView(EntityDetailView):
    queryset = Appointment.objects.select_related("patient", "doctor")
    serializer_class = AppointmentSerializer


class AppointmentCreateView(EntityCreateView):
    queryset = Appointment.objects.all()
    serializer_class = AppointmentSerializer

    def create(self, request, *args, **kwargs):
        # Missing fields and non-positive intervals fail here with 400
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            logger.warning(f"Rejected appointment: {serializer.errors}")
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        candidate = Appointment(**serializer.validated_data)

        # Scan every stored appointment, no room or time filter
        conflicting = find_overlapping(candidate, Appointment.objects.all())
        if conflicting is not None:
            logger.warning(
                f"Rejected appointment in room {candidate.room_id} "
                f"({candidate.starts_at} - {candidate.finishes_at}): "
                f"overlaps appointment {conflicting.pk}"
            )
            raise AppointmentOverlapError(conflicting=conflicting)

        self.perform_create(serializer)
        return Response(serializer.data, status=status.HTTP_200_OK)
