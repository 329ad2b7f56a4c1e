from django.urls import path
from . import views

urlpatterns = [
    # Doctors
    path('doctors', views.DoctorListView.as_view(), name='doctor-list'),
    path('doctors/<int:pk>', views.DoctorDetailView.as_view(), name='doctor-detail'),
    path('doctor', views.DoctorCreateView.as_view(), name='doctor-create'),

    # Patients
    path('patients', views.PatientListView.as_view(), name='patient-list'),
    path('patients/<int:pk>', views.PatientDetailView.as_view(), name='patient-detail'),
    path('patient', views.PatientCreateView.as_view(), name='patient-create'),

    # Rooms are keyed by name
    path('rooms', views.RoomListView.as_view(), name='room-list'),
    path('rooms/<str:room_name>', views.RoomDetailView.as_view(), name='room-detail'),
    path('room', views.RoomCreateView.as_view(), name='room-create'),

    # Appointments
    path('appointments', views.AppointmentListView.as_view(), name='appointment-list'),
    path('appointments/<int:pk>', views.AppointmentDetailView.as_view(), name='appointment-detail'),
    path('appointment', views.AppointmentCreateView.as_view(), name='appointment-create'),
]
