from rest_framework.exceptions import APIException
from rest_framework import status


class AppointmentOverlapError(APIException):

    status_code = status.HTTP_406_NOT_ACCEPTABLE
    default_detail = "The appointment overlaps an existing appointment in the same room."
    default_code = "appointment_overlap"

    def __init__(self, detail=None, conflicting=None):

        if detail is None and conflicting is not None:
            detail = (
                f"Room {conflicting.room_id} is already booked from "
                f"{conflicting.starts_at} to {conflicting.finishes_at}."
            )

        self.conflicting = conflicting
        super().__init__(detail)
