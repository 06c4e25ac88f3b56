"""
Spa response normalization

Booking systems disagree on casing: SpaBooker uses snake_case, Mindbody
PascalCase, generic APIs camelCase. Each field takes the first non-empty
spelling.
"""

from typing import Any, List

from ...contracts import SpaAvailability, SpaBooking, SpaPractitioner, SpaService
from ...normalization import as_dict, as_list, dig, first_truthy, pick


def normalize_services(data: Any) -> List[SpaService]:
    data = as_dict(data)
    services = first_truthy(
        as_list(data.get("services")), as_list(data.get("SessionTypes")), as_list(data.get("items")), default=[]
    )
    return [
        SpaService(
            id=pick(s, "id", "Id"),
            name=pick(s, "name", "Name"),
            description=pick(s, "description", "Description", default=""),
            duration=pick(s, "duration", "DefaultTimeLength", default=60),
            price=pick(s, "price", "OnlinePrice", "Price", default=0),
            category=pick(s, "category", "ProgramId", default="general"),
        )
        for s in map(as_dict, services)
    ]


def normalize_practitioners(data: Any) -> List[SpaPractitioner]:
    data = as_dict(data)
    staff = first_truthy(
        as_list(data.get("staff")), as_list(data.get("StaffMembers")), as_list(data.get("practitioners")), default=[]
    )
    return [
        SpaPractitioner(
            id=pick(p, "id", "Id"),
            name=pick(p, "name", "Name", "DisplayName"),
            bio=pick(p, "bio", "Bio", default=""),
            image_url=pick(p, "image_url", "imageUrl", "ImageURL"),
            specialties=as_list(p.get("specialties")),
        )
        for p in map(as_dict, staff)
    ]


def normalize_availability(data: Any) -> SpaAvailability:
    data = as_dict(data)
    return SpaAvailability(
        date=data.get("date"),
        slots=first_truthy(as_list(data.get("slots")), as_list(data.get("AvailableTimes")), default=[]),
    )


def normalize_booking(data: Any) -> SpaBooking:
    data = as_dict(data)
    return SpaBooking(
        id=pick(data, "id", "appointment_id", "appointmentId", "Id"),
        confirmation_number=pick(data, "confirmation", "confirmationNumber", "ConfirmationCode"),
        status=pick(data, "status", "Status"),
        service_id=pick(data, "service_id", "serviceId", "SessionTypeId"),
        service_name=pick(data, "service_name", "serviceName", "SessionTypeName"),
        practitioner_id=pick(data, "staff_id", "practitionerId", "StaffId"),
        practitioner_name=pick(data, "staff_name", "practitionerName", "StaffName"),
        date=pick(data, "date", "StartDate"),
        time=pick(data, "time", "StartTime"),
        duration=pick(data, "duration", "Duration"),
        guest={
            "name": first_truthy(dig(data, "client", "name"), data.get("ClientName")),
            "email": first_truthy(dig(data, "client", "email"), data.get("ClientEmail")),
            "phone": first_truthy(dig(data, "client", "phone"), data.get("ClientPhone")),
        },
    )
