"""Buyer shipping and contact details.

BuyerInfo starts empty when a checkout opens and is replaced field by
field as the buyer types.  It is read once, at submission time.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

from checkout.domain.exceptions import ValidationError

# Closed option lists offered by the shipping form.  District and ward
# lists are not keyed by city.
CITIES = ("Hà Nội", "TP HCM", "Đà Nẵng", "Hải Phòng", "Cần Thơ")
DISTRICTS = ("Quận 1", "Quận 2", "Quận 3", "Quận 4", "Quận 5")
WARDS = ("Phường 1", "Phường 2", "Phường 3", "Phường 4", "Phường 5")


@dataclass(frozen=True)
class BuyerInfo:

    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    district: str = ""
    ward: str = ""
    note: str = ""

    @staticmethod
    def empty() -> BuyerInfo:
        return BuyerInfo()

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def with_field(self, name: str, value: str) -> BuyerInfo:
        """Return a copy with *name* set to *value*."""
        if name not in self.field_names():
            raise ValidationError(f"Unknown buyer field '{name}'")
        return replace(self, **{name: value})

    def to_payload(self) -> dict[str, str]:
        return {
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "city": self.city,
            "district": self.district,
            "ward": self.ward,
            "note": self.note,
        }
