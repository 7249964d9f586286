import unittest

from scrypt_credentials.core.base64_canonical import (
    decode_unpadded,
    encode_unpadded,
    is_canonical,
    pad,
    strip,
)


class PadStripTests(unittest.TestCase):
    def test_pad_reaches_multiple_of_four(self):
        self.assertEqual(pad("QUJD"), "QUJD")
        self.assertEqual(pad("QUI"), "QUI=")
        self.assertEqual(pad("QQ"), "QQ==")
        self.assertEqual(pad("QUJDR"), "QUJDR===")

    def test_strip_removes_only_trailing_padding(self):
        self.assertEqual(strip("QQ=="), "QQ")
        self.assertEqual(strip("QUI="), "QUI")
        self.assertEqual(strip("QUJD"), "QUJD")
        self.assertEqual(strip("Q=Q="), "Q=Q")


class CanonicalTests(unittest.TestCase):
    def test_unpadded_values_are_canonical(self):
        self.assertTrue(is_canonical("QWJjZGVmZ2hpamtsbW5vcA"))
        self.assertTrue(is_canonical("UVdZcWJjZGVmZ2hpamtsbW5vcA"))
        self.assertTrue(is_canonical("ab+/"))

    def test_non_zero_trailing_bits_are_rejected(self):
        # "QR" decodes to the same byte as "QQ" but does not re-encode to it
        self.assertTrue(is_canonical("QQ"))
        self.assertFalse(is_canonical("QR"))

    def test_invalid_characters_are_rejected(self):
        for text in ("ab-_", "a b c", "abc\n", "ab*d", "héllo", "A"):
            with self.subTest(text=text):
                self.assertFalse(is_canonical(text))

    def test_non_string_is_not_canonical(self):
        self.assertFalse(is_canonical(None))
        self.assertFalse(is_canonical(b"QUJD"))

    def test_encode_and_decode_unpadded(self):
        self.assertEqual(encode_unpadded(b"Abcdefghijklmnop"), "QWJjZGVmZ2hpamtsbW5vcA")
        self.assertEqual(decode_unpadded("QWJjZGVmZ2hpamtsbW5vcA"), b"Abcdefghijklmnop")
        self.assertEqual(encode_unpadded(b""), "")

    def test_decode_unpadded_rejects_padding_and_junk(self):
        with self.assertRaises(ValueError):
            decode_unpadded("QQ==")
        with self.assertRaises(ValueError):
            decode_unpadded("QR")


if __name__ == "__main__":
    unittest.main()
