from typing import Type

from cartehandicap.models.accommodation import Accommodation, DisabilityType
from cartehandicap.models.base import BaseModel

# accommodation catalog
accessible_parking = Accommodation(
    id=10,
    service_name="Accessible parking permit",
    service_description="Reserved parking spaces close to building entrances",
    province="CA",
)
companion_pass = Accommodation(
    id=11,
    service_name="Companion pass",
    service_description="Free admission for an accompanying support person",
    province="CA",
)
sign_language = Accommodation(
    id=20,
    service_name="Sign language interpretation",
    service_description="LSQ/ASL interpreter on request for public services",
    province="QC",
)
captioning = Accommodation(
    id=21,
    service_name="Real-time captioning",
    service_description="Live captions for events and appointments",
    province="ON",
)
guide_dog_access = Accommodation(
    id=30,
    service_name="Guide dog access",
    service_description="Guaranteed access for guide and service dogs",
    province="CA",
)
braille_documents = Accommodation(
    id=31,
    service_name="Braille documents",
    service_description="Official documents provided in braille",
    province="QC",
)
quiet_room = Accommodation(
    id=40,
    service_name="Quiet room access",
    service_description="Access to low-stimulation rooms in public venues",
    province="ON",
)
priority_queue = Accommodation(
    id=50,
    service_name="Priority queue",
    service_description="Skip waiting lines at participating counters",
    province="QC",
)

BOOTSTRAP: dict[Type[BaseModel], list[BaseModel]] = {
    Accommodation: [
        accessible_parking,
        companion_pass,
        sign_language,
        captioning,
        guide_dog_access,
        braille_documents,
        quiet_room,
        priority_queue,
    ],
    DisabilityType: [
        DisabilityType(id=1, name="mobility", accommodations=[accessible_parking]),
        DisabilityType(id=2, name="visual", accommodations=[guide_dog_access, braille_documents]),
        DisabilityType(id=3, name="hearing", accommodations=[sign_language, captioning]),
        DisabilityType(id=4, name="cognitive", accommodations=[companion_pass, quiet_room]),
        DisabilityType(id=5, name="mental_health", accommodations=[quiet_room, priority_queue]),
    ],
}
