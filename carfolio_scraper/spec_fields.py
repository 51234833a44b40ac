"""
Static field configuration for Carfolio specification tables.
"""

from dataclasses import dataclass


# Canonical keys that carry derived or duplicate information. They are not
# mapped onto the Vehicle record and are not reported as unused.
IGNORED_FIELDS = frozenset([
    "bmep_(brake_mean_effective_pressure)",
    "bore/stroke_ratio",
    "brakes_f/r",
    "catalytic_converter",
    "cda",
    "compressor",
    "frontal_area",
    "front_brake_diameter",
    "fuel_consumption",
    "fuel_system",
    "intercooler",
    "km/litre",
    "length:wheelbase_ratio",
    "litres/100km",
    "maximum_power_output(sae_net)",
    "maximum_torque(sae_net)",
    "rac_rating",
    "rear_brake_diameter",
    "specific_output",
    "specific_output(sae_net)",
    "specific_torque",
    "specific_torque(sae_net)",
    "sump",
    "turns_lock-to-lock",
    "uk_mpg",
    "unitary_capacity",
])

# Row labels (lowercased, before canonicalization) skipped while the table is read
IGNORED_ROWS = frozenset([
    "universal fuel consumption (calculated from the above)",
])

# Cell values that mean "no data"
USELESS_VALUES = frozenset([
    "",
    "N/A",
])

# Phrase the site prints in place of a value
NO_INFORMATION = "No information available"

# Glyphs rewritten in labels and values before anything else looks at them
GLYPH_REPLACEMENTS = {
    "\u00d7": "x",    # multiplication sign, as in "86.0 × 86.0 mm"
    "\u00a0": " ",    # non-breaking space between amount and unit
}

# Labels of the two entries in every front/rear side map
FRONT = "Front"
REAR = "Rear"

# Labels of the two entries in the power and torque maps
VALUE = "Value"
RPM = "RPM"


@dataclass(frozen=True)
class ExtractionConfig:
    """Read-only lookup sets shared by the table builder and the assembler."""
    ignored_fields: frozenset = IGNORED_FIELDS
    ignored_rows: frozenset = IGNORED_ROWS
    useless_values: frozenset = USELESS_VALUES

    def is_ignored_field(self, key: str) -> bool:
        return key in self.ignored_fields

    def is_ignored_row(self, label: str) -> bool:
        return label.strip().lower() in self.ignored_rows

    def is_useless_value(self, value: str) -> bool:
        return value in self.useless_values


DEFAULT_CONFIG = ExtractionConfig()
