import unittest

from otpkit import HOTP, parse_secret
from otpkit.exceptions import InvalidParameter
from otpkit.otp import MAX_COUNTER, hotp, int_to_bytestring
from otpkit.parameters import Algorithm

RFC_SECRET = b"12345678901234567890"
RFC_SECRET_B32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"

# RFC 4226 Appendix D
RFC4226_CODES = ["755224", "287082", "359152", "969429", "338314", "254676", "287922", "162583", "399871", "520489"]


class TestIntToBytestring(unittest.TestCase):
    def test_big_endian_eight_bytes(self):
        self.assertEqual(int_to_bytestring(0), b"\x00" * 8)
        self.assertEqual(int_to_bytestring(12345), b"\x00\x00\x00\x00\x00\x00\x30\x39")
        self.assertEqual(int_to_bytestring(MAX_COUNTER), b"\xff" * 8)

    def test_out_of_range(self):
        for counter in [-1, MAX_COUNTER + 1]:
            with self.subTest(counter=counter):
                with self.assertRaises(InvalidParameter):
                    int_to_bytestring(counter)


class TestHotpFunction(unittest.TestCase):
    def test_rfc4226_vectors(self):
        for counter, expected in enumerate(RFC4226_CODES):
            with self.subTest(counter=counter):
                self.assertEqual(hotp(RFC_SECRET, counter, 6, Algorithm.SHA1), expected)

    def test_deterministic(self):
        first = hotp(RFC_SECRET, 1234, 8, Algorithm.SHA512)
        self.assertEqual(first, hotp(RFC_SECRET, 1234, 8, Algorithm.SHA512))

    def test_output_length(self):
        for digits in range(1, 11):
            for counter in range(20):
                with self.subTest(digits=digits, counter=counter):
                    code = hotp(RFC_SECRET, counter, digits, Algorithm.SHA1)
                    self.assertEqual(len(code), digits)
                    self.assertTrue(code.isdigit())

    def test_shorter_codes_are_suffixes(self):
        self.assertEqual(hotp(RFC_SECRET, 0, 1, Algorithm.SHA1), "4")
        self.assertEqual(hotp(RFC_SECRET, 0, 10, Algorithm.SHA1), "1284755224")

    def test_counter_bounds(self):
        self.assertEqual(len(hotp(RFC_SECRET, MAX_COUNTER)), 6)
        with self.assertRaises(InvalidParameter):
            hotp(RFC_SECRET, MAX_COUNTER + 1)
        with self.assertRaises(InvalidParameter):
            hotp(RFC_SECRET, -1)


class TestHOTP(unittest.TestCase):
    def test_at(self):
        hotp_handler = HOTP(RFC_SECRET_B32)
        for counter, expected in enumerate(RFC4226_CODES):
            with self.subTest(counter=counter):
                self.assertEqual(hotp_handler.at(counter), expected)

    def test_initial_count(self):
        hotp_handler = HOTP(RFC_SECRET_B32, initial_count=5)
        self.assertEqual(hotp_handler.at(0), "254676")
        self.assertEqual(hotp_handler.at(4), "520489")

    def test_verify(self):
        hotp_handler = HOTP(RFC_SECRET_B32)
        self.assertTrue(hotp_handler.verify("755224", 0))
        self.assertTrue(hotp_handler.verify(287082, 1))
        self.assertFalse(hotp_handler.verify("755224", 1))
        self.assertFalse(hotp_handler.verify("000000", 0))

    def test_verify_accepts_fullwidth_digits(self):
        self.assertTrue(HOTP(RFC_SECRET_B32).verify("７５５２２４", 0))

    def test_secret_is_normalized(self):
        hotp_handler = HOTP("gezd gnbv gy3t qojq gezd gnbv gy3t qojq")
        self.assertEqual(hotp_handler.secret, RFC_SECRET_B32)
        self.assertEqual(hotp_handler.byte_secret(), RFC_SECRET)
        self.assertEqual(hotp_handler.at(0), "755224")

    def test_invalid_digits(self):
        with self.assertRaises(InvalidParameter):
            HOTP(RFC_SECRET_B32, digits=11)

    def test_parameters_from_totp_uri(self):
        params = parse_secret("otpauth://totp/alice?secret={}&digits=8".format(RFC_SECRET_B32))
        self.assertEqual(HOTP(params).at(0), "84755224")

    def test_writes_no_provisioning_uri(self):
        # an otpauth://hotp/ URI would not parse back through parse_secret
        self.assertFalse(hasattr(HOTP(RFC_SECRET_B32), "provisioning_uri"))
