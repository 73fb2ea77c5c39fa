"""Travel note metadata."""

from dataclasses import dataclass
from datetime import date

from weathernotes.errors import MetadataError


@dataclass(frozen=True)
class NoteMeta:
    city: str
    arrival: date
    departure: date

    def __post_init__(self) -> None:
        if not self.city or not self.city.strip():
            raise MetadataError("'city' must not be empty")
        if self.arrival > self.departure:
            raise MetadataError(
                f"arrival {self.arrival} is after departure {self.departure}"
            )
