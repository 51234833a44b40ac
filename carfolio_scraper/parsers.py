"""
Typed parsers for specification values.

Every parser takes the sanitized cell text and returns a typed value, or None when
the text does not have the expected shape. None of them raise on bad input.
"""

import logging
from typing import Dict, Optional, Pattern

from .models import Measurement, MpgRating, Specification
from .spec_fields import VALUE, RPM
from .spec_regexes import (
    first_group, SPLIT_REGEX, MAX_SPEED_REGEX, DISPLACEMENT_REGEX,
    POWER_REGEX, TORQUE_REGEX, RPM_REGEX, UNSIGNED_REGEX, DECIMAL_REGEX
)

logger = logging.getLogger(__name__)

U8_MAX = 2 ** 8 - 1
U16_MAX = 2 ** 16 - 1


def split_string(text: str) -> list:
    """Split on runs of spaces and commas."""
    return SPLIT_REGEX.split(text)


def _parse_unsigned(text: str, maximum: int) -> Optional[int]:
    if not UNSIGNED_REGEX.fullmatch(text):
        return None
    amount = int(text)
    if amount > maximum:
        return None
    return amount


def _parse_float(text: str) -> Optional[float]:
    if not DECIMAL_REGEX.fullmatch(text):
        return None
    return float(text)


# ====================
# SCALARS
# ====================

def extract_string(text: str) -> Optional[str]:
    # A missing row reaches the parser as "", which is no value
    return text or None


def extract_u8(text: str) -> Optional[int]:
    return _parse_unsigned(text, U8_MAX)


def extract_u16(text: str) -> Optional[int]:
    return _parse_unsigned(text, U16_MAX)


def extract_float(text: str) -> Optional[float]:
    return _parse_float(text)


# ====================
# AMOUNT + UNIT
# ====================

def extract_string_with_unit(text: str) -> Specification:
    """
    Split "<amount> <unit>" into its first two tokens.

    >>> extract_string_with_unit("1200 kg")
    Measurement(value='1200', unit='kg')
    """
    splits = split_string(text)
    if len(splits) < 2:
        return None
    return Measurement(splits[0], splits[1])


def extract_u16_with_unit(text: str) -> Specification:
    spec = extract_string_with_unit(text)
    if spec is None:
        return None
    amount = _parse_unsigned(spec.value, U16_MAX)
    if amount is None:
        return None
    return Measurement(amount, spec.unit)


def extract_float_with_unit(text: str) -> Specification:
    spec = extract_string_with_unit(text)
    if spec is None:
        return None
    amount = _parse_float(spec.value)
    if amount is None:
        return None
    return Measurement(amount, spec.unit)


# ====================
# COMPOSITE VALUES
# ====================

def extract_max_speed(text: str) -> Specification:
    """Pick "155 mph" out of text like "Manufacturer's estimate: 155 mph"."""
    match = first_group(MAX_SPEED_REGEX, text)
    if match is None:
        logger.debug(f"Unable to find matches in '{text}' with regex '{MAX_SPEED_REGEX.pattern}'")
        return None
    return extract_u16_with_unit(match)


def extract_displacement(text: str) -> Specification:
    match = first_group(DISPLACEMENT_REGEX, text)
    if match is None:
        logger.debug(f"Could not parse displacement from '{text}' with regex '{DISPLACEMENT_REGEX.pattern}'")
        return None
    return extract_float_with_unit(match)


def _extract_rpm_pair(text: str, value_regex: Pattern) -> Dict[str, Specification]:
    result = {}
    for key, regex in ((VALUE, value_regex), (RPM, RPM_REGEX)):
        match = first_group(regex, text)
        if match is None:
            logger.debug(f"{key} was unable to be parsed from '{text}' with regex '{regex.pattern}'")
            result[key] = None
        else:
            result[key] = extract_u16_with_unit(match)
    return result


def extract_power(text: str) -> Dict[str, Specification]:
    """
    Read kW and rpm figures from text like "220 kW @ 6500 rpm, 295 bhp @ 6500 rpm".

    Returns:
        Dict with keys "Value" and "RPM", each a Measurement or None. Both keys are
        always present.
    """
    return _extract_rpm_pair(text, POWER_REGEX)


def extract_torque(text: str) -> Dict[str, Specification]:
    """Same as extract_power, for "Nm" figures."""
    return _extract_rpm_pair(text, TORQUE_REGEX)


def extract_mpg(text: str) -> Optional[MpgRating]:
    """Read "18/25/21" (city/highway/combined) from the first token."""
    splits = split_string(text)[0].split('/')
    if len(splits) < 3:
        return None
    figures = [_parse_float(split) for split in splits[:3]]
    if any(figure is None for figure in figures):
        return None
    return MpgRating(*figures)


def extract_power_to_weight_ratio(text: str) -> Specification:
    """The site prints several ratios separated by commas; the second one is used."""
    splits = text.split(',')
    if len(splits) < 2:
        return None
    return extract_float_with_unit(splits[1].strip())


def extract_bore_stroke(text: str) -> Specification:
    """Keep "86.0 x 86.0 mm" as the pair ("86.0x86.0", "mm")."""
    return extract_string_with_unit(text.replace(' x ', 'x'))
