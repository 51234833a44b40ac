import unittest

from carfolio_scraper.models import Measurement, MpgRating
from carfolio_scraper.parsers import (
    extract_string, extract_u8, extract_u16, extract_float, extract_string_with_unit,
    extract_u16_with_unit, extract_float_with_unit, extract_max_speed, extract_displacement,
    extract_power, extract_torque, extract_mpg, extract_power_to_weight_ratio,
    extract_bore_stroke, split_string
)


class ScalarParserTests(unittest.TestCase):
    def test_string_is_returned_verbatim(self) -> None:
        self.assertEqual(extract_string("Turbocharged, intercooled"), "Turbocharged, intercooled")

    def test_empty_string_is_no_value(self) -> None:
        self.assertIsNone(extract_string(""))

    def test_u8(self) -> None:
        self.assertEqual(extract_u8("4"), 4)
        self.assertEqual(extract_u8("255"), 255)
        self.assertIsNone(extract_u8("256"))
        self.assertIsNone(extract_u8("-1"))
        self.assertIsNone(extract_u8("four"))
        self.assertIsNone(extract_u8(""))

    def test_u16(self) -> None:
        self.assertEqual(extract_u16("65535"), 65535)
        self.assertIsNone(extract_u16("65536"))
        self.assertIsNone(extract_u16("12.5"))

    def test_float(self) -> None:
        self.assertAlmostEqual(extract_float("0.31"), 0.31)
        self.assertAlmostEqual(extract_float("3.44"), 3.44)
        self.assertIsNone(extract_float("n/a"))
        self.assertIsNone(extract_float(""))

    def test_float_rejects_non_plain_numbers(self) -> None:
        self.assertIsNone(extract_float("1_0"))
        self.assertIsNone(extract_float(" 0.31 "))
        self.assertIsNone(extract_float("nan"))
        self.assertIsNone(extract_float("inf"))
        self.assertAlmostEqual(extract_float("-1.5e2"), -150.0)
        self.assertAlmostEqual(extract_float(".5"), 0.5)


class UnitParserTests(unittest.TestCase):
    def test_split_on_spaces_and_commas(self) -> None:
        self.assertEqual(split_string("1200 kg, 2646 lbs"), ["1200", "kg", "2646", "lbs"])

    def test_string_with_unit(self) -> None:
        self.assertEqual(extract_string_with_unit("86.0x86.0 mm"), ("86.0x86.0", "mm"))

    def test_string_with_unit_needs_two_tokens(self) -> None:
        self.assertIsNone(extract_string_with_unit("1200"))
        self.assertIsNone(extract_string_with_unit(""))

    def test_u16_with_unit(self) -> None:
        result = extract_u16_with_unit("1200 kg")
        self.assertEqual(result, (1200, "kg"))
        self.assertIsInstance(result, Measurement)
        self.assertEqual(result.value, 1200)
        self.assertEqual(result.unit, "kg")

    def test_u16_with_unit_takes_first_two_tokens(self) -> None:
        self.assertEqual(extract_u16_with_unit("4430 mm, 174.4 in"), (4430, "mm"))

    def test_u16_with_unit_rejects_bad_amounts(self) -> None:
        self.assertIsNone(extract_u16_with_unit("1200"))
        self.assertIsNone(extract_u16_with_unit("heavy kg"))
        self.assertIsNone(extract_u16_with_unit("70000 kg"))
        self.assertIsNone(extract_u16_with_unit("12.5 mm"))

    def test_float_with_unit(self) -> None:
        self.assertEqual(extract_float_with_unit("5.1 s"), (5.1, "s"))
        self.assertEqual(extract_float_with_unit("64 litres"), (64.0, "litres"))
        self.assertIsNone(extract_float_with_unit("quick s"))
        self.assertIsNone(extract_float_with_unit("5.1"))
        self.assertIsNone(extract_float_with_unit("1_200 kg"))


class CompositeParserTests(unittest.TestCase):
    def test_max_speed_reads_mph_from_prose(self) -> None:
        self.assertEqual(
            extract_max_speed("Manufacturer's estimate: 155 mph, 249 km/h"),
            (155, "mph")
        )

    def test_max_speed_without_mph(self) -> None:
        self.assertIsNone(extract_max_speed("249 km/h"))
        self.assertIsNone(extract_max_speed(""))

    def test_displacement(self) -> None:
        self.assertEqual(
            extract_displacement("1998 cm3, 121.9 cu in, 2.0 litre"),
            (2.0, "litre")
        )
        self.assertIsNone(extract_displacement("1998 cm3"))

    def test_power_with_value_and_rpm(self) -> None:
        self.assertEqual(
            extract_power("220 kW @ 6500 rpm, 295 bhp @ 6500 rpm"),
            {"Value": (220, "kW"), "RPM": (6500, "rpm")}
        )

    def test_power_in_reverse_order(self) -> None:
        self.assertEqual(
            extract_power("at 6500 rpm: 220 kW"),
            {"Value": (220, "kW"), "RPM": (6500, "rpm")}
        )

    def test_power_captures_are_independent(self) -> None:
        self.assertEqual(extract_power("220 kW"), {"Value": (220, "kW"), "RPM": None})
        self.assertEqual(extract_power("peak at 6500 rpm"), {"Value": None, "RPM": (6500, "rpm")})

    def test_power_always_has_both_keys(self) -> None:
        for text in ["", "garbage", "295 bhp"]:
            result = extract_power(text)
            self.assertEqual(set(result), {"Value", "RPM"})
            self.assertIsNone(result["Value"])
            self.assertIsNone(result["RPM"])

    def test_torque(self) -> None:
        self.assertEqual(
            extract_torque("400 Nm @ 4500 rpm, 295 lb-ft @ 4500 rpm"),
            {"Value": (400, "Nm"), "RPM": (4500, "rpm")}
        )
        self.assertEqual(extract_torque("295 lb-ft"), {"Value": None, "RPM": None})

    def test_mpg_triplet(self) -> None:
        result = extract_mpg("18/25/21")
        self.assertEqual(result, (18.0, 25.0, 21.0))
        self.assertIsInstance(result, MpgRating)
        self.assertEqual(result.highway, 25.0)

    def test_mpg_uses_first_token(self) -> None:
        self.assertEqual(extract_mpg("18/25/21 mpg, 13.1/9.4/11.2 l/100km"), (18.0, 25.0, 21.0))

    def test_mpg_failures(self) -> None:
        self.assertIsNone(extract_mpg("18/25"))
        self.assertIsNone(extract_mpg("18/x/21"))
        self.assertIsNone(extract_mpg("1_8/25/21"))
        self.assertIsNone(extract_mpg(""))

    def test_power_to_weight_uses_second_token(self) -> None:
        self.assertEqual(
            extract_power_to_weight_ratio("196.3 bhp/ton, 146.4 kW/tonne"),
            (146.4, "kW/tonne")
        )
        self.assertIsNone(extract_power_to_weight_ratio("196.3 bhp/ton"))

    def test_bore_stroke_is_a_string_pair(self) -> None:
        self.assertEqual(extract_bore_stroke("86.0 x 86.0 mm"), ("86.0x86.0", "mm"))
        self.assertIsNone(extract_bore_stroke("86.0"))


if __name__ == "__main__":
    unittest.main()
