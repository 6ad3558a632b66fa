"""Delivery addresses: Ordering's copy of every customer's address book."""

from protean.fields import Boolean, Float, Identifier, String

from ordering.domain import ordering


@ordering.projection
class DeliveryAddress:
    address_id = Identifier(identifier=True, required=True)
    user_id = Identifier(required=True)
    label = String()
    district = String(required=True)
    street = String(required=True)
    building_number = String()
    floor = String()
    apartment = String()
    landmark = String()
    delivery_instructions = String()
    latitude = Float()
    longitude = Float()
    is_default = Boolean(default=False)

    def snapshot(self):
        """Fields copied onto an order at checkout."""
        return {
            "address_id": str(self.address_id),
            "label": self.label,
            "district": self.district,
            "street": self.street,
            "building_number": self.building_number,
            "floor": self.floor,
            "apartment": self.apartment,
            "landmark": self.landmark,
            "delivery_instructions": self.delivery_instructions,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
