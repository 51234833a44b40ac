"""
Data models for Carfolio makes, models and vehicle specifications.
"""

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Optional, Any

from .spec_fields import FRONT, REAR, VALUE, RPM


class Measurement(NamedTuple):
    """A parsed amount together with the unit text printed beside it."""
    value: Any
    unit: str


class MpgRating(NamedTuple):
    """US fuel economy figures."""
    city: float
    highway: float
    combined: float


# A measurable quantity: absent, or an amount with its unit
Specification = Optional[Measurement]


def _side_map() -> Dict[str, Any]:
    return {FRONT: None, REAR: None}


def _rpm_map() -> Dict[str, Any]:
    return {VALUE: None, RPM: None}


SIDE_MAP_FIELDS = ("power", "tires", "torque", "track", "wheel_size")


@dataclass
class Make:
    """A manufacturer listed on the specifications index."""
    name: str
    country: str
    url: str


@dataclass
class Model:
    """A model link listed on a make's page."""
    make: Make
    name: str
    year: str
    url: str


@dataclass(frozen=True)
class Vehicle:
    """
    Specifications of one vehicle, read from a single specification page.

    Every field other than the identity fields may be absent. Numeric fields that
    come with a unit on the page are ``Measurement`` tuples so the unit travels
    with the amount. The side maps are keyed ``Front``/``Rear``; ``power`` and
    ``torque`` are keyed ``Value``/``RPM``.
    """

    # Identity
    make: str
    model: str
    year: str
    url: str = ""

    aspiration: Optional[str] = None
    body_type: Optional[str] = None
    bore_stroke: Specification = None  # amount kept as text, e.g. "86.0x86.0"
    carfolio_id: Optional[str] = None
    compression_ratio: Optional[str] = None
    curb_weight: Specification = None
    displacement: Specification = None
    door_count: Optional[int] = None
    drag_coefficient: Optional[float] = None
    drive_wheel_config: Optional[str] = None
    engine_code: Optional[str] = None
    engine_config: Optional[str] = None
    engine_construction: Optional[str] = None
    engine_coolant: Optional[str] = None
    engine_layout: Optional[str] = None
    engine_manufacturer: Optional[str] = None
    engine_position: Optional[str] = None
    engine_type: Optional[str] = None
    final_drive_ratio: Optional[float] = None
    fuel_capacity: Specification = None
    ground_clearance: Specification = None
    height: Specification = None
    length: Specification = None
    max_speed: Specification = None
    mpg: Optional[MpgRating] = None
    power: Mapping[str, Specification] = field(default_factory=_rpm_map)
    power_to_weight_ratio: Specification = None
    steering_config: Optional[str] = None
    tires: Mapping[str, Optional[str]] = field(default_factory=_side_map)
    top_gear_ratio: Optional[float] = None
    torque: Mapping[str, Specification] = field(default_factory=_rpm_map)
    track: Mapping[str, Specification] = field(default_factory=_side_map)
    transmission: Optional[str] = None
    valve_config: Optional[str] = None
    weight_distribution: Optional[str] = None
    weight_to_power_ratio: Specification = None
    wheel_size: Mapping[str, Optional[str]] = field(default_factory=_side_map)
    wheelbase: Specification = None
    width: Specification = None
    zero_to_sixty: Specification = None

    def __post_init__(self):
        # Side maps are read-only views so the record cannot change after assembly
        for name in SIDE_MAP_FIELDS:
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @property
    def title(self) -> str:
        return ' '.join(part for part in (self.year, self.make, self.model) if part)

    def to_dict(self) -> dict:
        """Convert the vehicle to a JSON-serializable dictionary."""
        return {f.name: _to_json(getattr(self, f.name)) for f in fields(self)}


def _to_json(value: Any) -> Any:
    if isinstance(value, Measurement):
        return {"value": value.value, "unit": value.unit}
    if isinstance(value, MpgRating):
        return value._asdict()
    if isinstance(value, Mapping):
        return {key: _to_json(item) for key, item in value.items()}
    return value
