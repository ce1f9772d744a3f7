import random
import unittest

from snowflake_gateway.app.services import bit_layout
from snowflake_gateway.app.services.bit_layout import binary_from_decimal, decimal_from_binary
from snowflake_gateway.app.services.errors import InvalidInputError

EDGE_VALUES = [
    1,
    2,
    9,
    10,
    (1 << 32) - 1,
    1 << 32,
    (1 << 53) - 1,
    1 << 53,
    (1 << 53) + 1,
    266241948824764416,
    1 << 63,
    (1 << 64) - 2,
    (1 << 64) - 1,
]


def _sample_values():
    rng = random.Random(20150101)
    values = list(EDGE_VALUES)
    while len(values) < 500:
        value = rng.getrandbits(64)
        if value:
            values.append(value)
    return values


class TestDecimalFromBinary(unittest.TestCase):
    def test_matches_native_rendering(self):
        for value in _sample_values():
            self.assertEqual(decimal_from_binary(format(value, "064b")), str(value))

    def test_accepts_unpadded_and_wide_input(self):
        self.assertEqual(decimal_from_binary("1010"), "10")
        self.assertEqual(decimal_from_binary("1" * 80), str((1 << 80) - 1))

    def test_zero_has_no_digits(self):
        with self.assertRaises(InvalidInputError):
            decimal_from_binary("0" * 64)
        with self.assertRaises(InvalidInputError):
            decimal_from_binary("")

    def test_rejects_non_binary_characters(self):
        with self.assertRaises(InvalidInputError) as ctx:
            decimal_from_binary("10201")
        self.assertEqual(ctx.exception.value, "10201")


class TestBinaryFromDecimal(unittest.TestCase):
    def test_matches_native_bit_pattern(self):
        for value in _sample_values():
            self.assertEqual(binary_from_decimal(str(value)).zfill(64), format(value, "064b"))

    def test_has_no_leading_zeros(self):
        self.assertEqual(binary_from_decimal("5"), "101")
        self.assertEqual(binary_from_decimal("18446744073709551615"), "1" * 64)

    def test_zero_has_no_bits(self):
        with self.assertRaises(InvalidInputError):
            binary_from_decimal("0")

    def test_rejects_non_digits(self):
        for bad in ("", "-1", "1.5", "abc", " 12"):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidInputError):
                    binary_from_decimal(bad)


class TestLayout(unittest.TestCase):
    def test_compose_places_fields(self):
        bits = bit_layout.compose(31152000000, 1, 0, 0)
        self.assertEqual(len(bits), 64)
        self.assertEqual(int(bits, 2), (31152000000 << 22) | (1 << 17))

    def test_split_inverts_compose(self):
        bits = bit_layout.compose(bit_layout.MAX_TIMESTAMP_DELTA, 31, 17, 4094)
        self.assertEqual(bit_layout.split(bits), (bit_layout.MAX_TIMESTAMP_DELTA, 31, 17, 4094))

    def test_compose_rejects_overflowing_fields(self):
        with self.assertRaises(InvalidInputError):
            bit_layout.compose(1 << 42, 1, 0, 0)
        with self.assertRaises(InvalidInputError):
            bit_layout.compose(0, 32, 0, 0)
        with self.assertRaises(InvalidInputError):
            bit_layout.compose(0, 0, 0, 4096)

    def test_split_requires_full_width(self):
        with self.assertRaises(InvalidInputError):
            bit_layout.split("101")


if __name__ == "__main__":
    unittest.main()
