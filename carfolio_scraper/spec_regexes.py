"""
Regular expressions for pulling measurements out of specification values.
"""

import re


# ==============
# BASIC HELPERS
# ==============

def first_group(pattern, text, flags=0):
    """
    Return the first matched group(1) for a compiled pattern or pattern string.
    None if no match.
    """
    if isinstance(pattern, str):
        regex = re.compile(pattern, flags)
    else:
        regex = pattern
    m = regex.search(text)
    return m.group(1).strip() if m else None


# Separator between amount and unit: any run of spaces and commas
SPLIT_REGEX = re.compile(r"[, ]+")


# ====================
# MAXIMUM SPEED
# ====================

# Matches the mph figure inside prose like
# "Manufacturer's estimate: 155 mph (250 km/h)"
MAX_SPEED_REGEX = re.compile(r"(\d+ mph)")


# ====================
# DISPLACEMENT
# ====================

# Matches "2.0 litre" in "1998 cm3 / 121.9 cu in / 2.0 litre"
DISPLACEMENT_REGEX = re.compile(r"(\d+\.\d+ litre)")


# ====================
# POWER / TORQUE
# ====================

# Each capture is searched for on its own so a missing rpm figure never hides the
# magnitude, and the two may appear in either order.
POWER_REGEX = re.compile(r"(\d+ kW)")

TORQUE_REGEX = re.compile(r"(\d+ Nm)")

RPM_REGEX = re.compile(r"(\d+ rpm)")

# Example:
# value = first_group(POWER_REGEX, "220 kW @ 6500 rpm, 295 bhp @ 6500 rpm")  # "220 kW"
# rpm = first_group(RPM_REGEX, "220 kW @ 6500 rpm, 295 bhp @ 6500 rpm")     # "6500 rpm"


# ====================
# PLAIN NUMBERS
# ====================

UNSIGNED_REGEX = re.compile(r"\+?[0-9]+")

# Plain decimal like "3.44", "0.31" or "1e3"; no digit-group underscores or padding
DECIMAL_REGEX = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
