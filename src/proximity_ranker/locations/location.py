import math
import numbers
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..geocoding.models import AddressQuery
from ..geocoding.normalizers import parse_city_state_zip


class CandidateRecord(BaseModel):
    """One raw record handed over by an ingestion source."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = Field(default="", alias="postal_code")
    address_line2: Optional[str] = None

    @field_validator("name", "street", "city", "state", "zip", "address_line2", mode="before")
    @classmethod
    def _blank_missing(cls, value):
        # Missing cells arrive as None or NaN; numeric ZIPs as int or float
        if value is None or (isinstance(value, float) and math.isnan(value)):
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _split_line2(self) -> "CandidateRecord":
        # "City, ST ZIP" lines only fill fields that were not given explicitly
        if self.address_line2 and not (self.city or self.state or self.zip):
            parsed = parse_city_state_zip(self.address_line2)
            self.city, self.state, self.zip = parsed.city, parsed.state, parsed.zip
        return self

    def is_blank(self) -> bool:
        """Neither a name nor any address field; kept but never geocoded."""
        return not (self.name or self.street or self.city or self.state or self.zip)

    def to_address(self) -> AddressQuery:
        """Address fields, falling back to the name when no address is present."""
        address = AddressQuery(
            street=self.street,
            city=self.city,
            state=self.state.upper(),
            postal_code=self.zip,
        )
        if address.is_empty():
            return AddressQuery(freeform=self.name)
        return address
