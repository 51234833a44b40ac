"""
Assembles Vehicle records from Carfolio specification pages.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from .markup import Node, element_within, inner_html, inner_text
from .models import Vehicle
from .parsers import (
    extract_string, extract_u8, extract_float, extract_u16_with_unit,
    extract_float_with_unit, extract_max_speed, extract_displacement, extract_power,
    extract_torque, extract_mpg, extract_power_to_weight_ratio, extract_bore_stroke
)
from .spec_fields import DEFAULT_CONFIG, ExtractionConfig, FRONT, REAR
from .spec_table import extract_specifications_table

logger = logging.getLogger(__name__)

T = TypeVar('T')

OVERVIEW_SELECTOR = "div h3 span.automobile"
MAKE_SELECTOR = "span.manufacturer"
MODEL_SELECTOR = "span.model.name"
YEAR_SELECTORS = ["span.Year", "span.modelyear", "span.model-year"]

# Vehicle attribute -> (canonical key, parser), in declaration order
SPECIFICATION_FIELDS: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "aspiration": ("aspiration", extract_string),
    "body_type": ("body_type", extract_string),
    "bore_stroke": ("bore_x_stroke", extract_bore_stroke),
    "carfolio_id": ("carfolio.com_id", extract_string),
    "compression_ratio": ("compression_ratio", extract_string),
    "curb_weight": ("kerb_weight", extract_u16_with_unit),
    "displacement": ("capacity", extract_displacement),
    "door_count": ("number_of_doors", extract_u8),
    "drag_coefficient": ("drag_coefficient", extract_float),
    "drive_wheel_config": ("drive_wheels", extract_string),
    "engine_code": ("engine_code", extract_string),
    "engine_config": ("cylinders", extract_string),
    "engine_construction": ("engine_construction", extract_string),
    "engine_coolant": ("engine_coolant", extract_string),
    "engine_layout": ("engine_layout", extract_string),
    "engine_manufacturer": ("engine_manufacturer", extract_string),
    "engine_position": ("engine_position", extract_string),
    "engine_type": ("engine_type", extract_string),
    "final_drive_ratio": ("final_drive_ratio", extract_float),
    "fuel_capacity": ("fuel_tank_capacity", extract_float_with_unit),
    "ground_clearance": ("ground_clearance", extract_u16_with_unit),
    "height": ("height", extract_u16_with_unit),
    "length": ("length", extract_u16_with_unit),
    "max_speed": ("maximum_speed", extract_max_speed),
    "mpg": ("us_mpg", extract_mpg),
    "power": ("maximum_power_output", extract_power),
    "power_to_weight_ratio": ("power-to-weight_ratio", extract_power_to_weight_ratio),
    "steering_config": ("steering", extract_string),
    "top_gear_ratio": ("top_gear_ratio", extract_float),
    "torque": ("maximum_torque", extract_torque),
    "transmission": ("gearbox", extract_string),
    "valve_config": ("valve_gear", extract_string),
    "weight_distribution": ("weight_distribution", extract_string),
    "weight_to_power_ratio": ("weight-to-power_ratio", extract_float_with_unit),
    "wheelbase": ("wheelbase", extract_u16_with_unit),
    "width": ("width", extract_u16_with_unit),
    "zero_to_sixty": ("acceleration_0-60mph", extract_float_with_unit),
}

# Vehicle attribute -> (front key, rear key, parser)
SIDE_FIELDS: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
    "tires": ("tyres_front", "tyres_rear", extract_string),
    "track": ("track/tread_(front)", "track/tread_(rear)", extract_u16_with_unit),
    "wheel_size": ("wheel_size_front", "wheel_size_rear", extract_string),
}


def _is_empty(parsed: Any) -> bool:
    if parsed is None:
        return True
    if isinstance(parsed, dict):
        return all(value is None for value in parsed.values())
    return False


def extract_specification(specifications: Dict[str, str], key: str,
                          parse_using: Callable[[str], T]) -> T:
    """
    Remove ``key`` from the mapping and parse its text.

    A missing key is treated like an empty value. Parse failures are logged and
    come back as None (or, for the power/torque parsers, a map of Nones); they
    never raise, so one bad field cannot stop the others.

    Args:
        specifications: Mapping built by extract_specifications_table; consumed
        key: Canonical key to look up
        parse_using: Parser applied to the raw text

    Returns:
        Whatever the parser returns
    """
    text = specifications.pop(key, "")
    logger.debug(f"{key} unparsed: {text!r}")
    parsed = parse_using(text)

    if _is_empty(parsed):
        logger.warning(f"{key} was unable to be parsed from {text!r}")
    else:
        logger.debug(f"{key} parsed: {parsed!r}")

    return parsed


def find_unused_fields(specifications: Dict[str, str],
                       config: Optional[ExtractionConfig] = None) -> List[Tuple[str, str]]:
    """Leftover entries that are neither empty nor known to be ignorable."""
    config = config or DEFAULT_CONFIG
    return [
        (key, value) for key, value in specifications.items()
        if value != "" and not config.is_ignored_field(key)
    ]


def assemble_vehicle(specifications: Dict[str, str], make: str = "", model: str = "",
                     year: str = "", url: str = "",
                     config: Optional[ExtractionConfig] = None) -> Tuple[Vehicle, List[Tuple[str, str]]]:
    """
    Build a Vehicle from a specification mapping.

    The mapping is consumed: every recognised key is removed, and what is left is
    audited for labels this module does not know about.

    Returns:
        Tuple of (vehicle, unused_fields) where unused_fields lists the leftover
        (key, value) pairs that suggest the page layout has changed
    """
    values: Dict[str, Any] = {}
    for name, (key, parser) in SPECIFICATION_FIELDS.items():
        values[name] = extract_specification(specifications, key, parser)

    for name, (front_key, rear_key, parser) in SIDE_FIELDS.items():
        values[name] = {
            FRONT: extract_specification(specifications, front_key, parser),
            REAR: extract_specification(specifications, rear_key, parser),
        }

    vehicle = Vehicle(make=make, model=model, year=year, url=url, **values)

    unused_fields = find_unused_fields(specifications, config)
    if unused_fields:
        listing = '\n'.join(f"  {key}: {value!r}" for key, value in unused_fields)
        logger.warning(f"Unused fields from specifications of {vehicle.title or url}:\n{listing}")

    return vehicle, unused_fields


def extract_model_make(overview: Node) -> str:
    return inner_html(element_within(overview, [MAKE_SELECTOR])).strip()


def extract_model_name(overview: Node) -> str:
    return inner_html(element_within(overview, [MODEL_SELECTOR])).strip()


def extract_model_year(overview: Node) -> str:
    return inner_text(element_within(overview, YEAR_SELECTORS)).strip()[:4]


def parse_vehicle_page(page: Node, url: str = "",
                       config: Optional[ExtractionConfig] = None) -> Tuple[Vehicle, List[Tuple[str, str]]]:
    """
    Parse one specification page.

    Args:
        page: Parsed specification page
        url: Page URL, recorded on the vehicle and used in log messages
        config: Lookup sets to apply (default: shared static configuration)

    Returns:
        Tuple of (vehicle, unused_fields), see assemble_vehicle

    Raises:
        ElementNotFound: If the page header or the specification table is missing
    """
    overview = element_within(page, [OVERVIEW_SELECTOR])
    make = extract_model_make(overview)
    model = extract_model_name(overview)
    year = extract_model_year(overview)
    logger.info(f"Parsing Model specifications for {year} {make} {model}")

    specifications = extract_specifications_table(page, source=url, config=config)
    logger.debug(f"Specifications for {year} {make} {model}: {specifications}")

    return assemble_vehicle(specifications, make=make, model=model, year=year, url=url, config=config)
