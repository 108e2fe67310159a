import unittest

from cpio_reader.byte_cursor import ByteCursor, Endianness
from cpio_reader.errors import InvalidNameError, InvalidNumberError, TruncatedError


class ByteCursorTest(unittest.TestCase):

    def test_take_byte_and_bytes(self):
        c = ByteCursor(b"abcdef")
        self.assertEqual(c.take_byte(), ord("a"))
        self.assertEqual(c.take_bytes(3), b"bcd")
        self.assertEqual(c.position, 4)
        self.assertEqual(c.remaining(), b"ef")

    def test_take_bytes_is_a_view(self):
        data = bytearray(b"hello")
        chunk = ByteCursor(data).take_bytes(5)
        data[0] = ord("j")
        self.assertEqual(chunk, b"jello")

    def test_views_are_readonly(self):
        c = ByteCursor(bytearray(b"abcd"))
        self.assertTrue(c.take_bytes(2).readonly)
        self.assertTrue(c.remaining().readonly)

    def test_truncation_consumes_nothing(self):
        c = ByteCursor(b"ab")
        with self.assertRaises(TruncatedError) as cm:
            c.take_bytes(3)
        self.assertEqual(cm.exception.wanted, 3)
        self.assertEqual(cm.exception.available, 2)
        self.assertEqual(c.position, 0)
        self.assertEqual(c.take_bytes(2), b"ab")
        with self.assertRaises(TruncatedError):
            c.take_byte()

    def test_negative_length_is_truncation(self):
        with self.assertRaises(TruncatedError):
            ByteCursor(b"abc").take_bytes(-1)

    def test_take_str(self):
        c = ByteCursor("héllo!".encode("utf-8"))
        self.assertEqual(c.take_str(6), "héllo")
        self.assertEqual(c.take_str(1), "!")

    def test_take_str_rejects_invalid_utf8(self):
        c = ByteCursor(b"\xff\xfeab")
        with self.assertRaises(InvalidNameError):
            c.take_str(2)
        self.assertEqual(c.position, 0)

    def test_take_u16(self):
        c = ByteCursor(b"\x01\x02\x01\x02")
        self.assertEqual(c.take_u16(Endianness.BIG), 0x0102)
        self.assertEqual(c.take_u16(Endianness.LITTLE), 0x0201)

    def test_take_octal(self):
        c = ByteCursor(b"000755" + b"13731427250")
        self.assertEqual(c.take_octal_u32(6), 0o755)
        self.assertEqual(c.take_octal_u64(11), 0o13731427250)

    def test_take_octal_rejects_non_digits(self):
        for text in (b"000758", b"  0755", b"+00755", b"0_0755", b"00x755"):
            c = ByteCursor(text)
            with self.assertRaises(InvalidNumberError, msg=text):
                c.take_octal_u32(6)
            self.assertEqual(c.position, 0)

    def test_take_octal_u32_overflow(self):
        with self.assertRaises(InvalidNumberError):
            ByteCursor(b"77777777777").take_octal_u32(11)
        self.assertEqual(ByteCursor(b"77777777777").take_octal_u64(11), 0o77777777777)

    def test_take_hex(self):
        c = ByteCursor(b"000081A4ffffffff")
        self.assertEqual(c.take_hex_u32(), 0o100644)
        self.assertEqual(c.take_hex_u32(), 0xFFFFFFFF)

    def test_take_hex_rejects_non_digits(self):
        for text in (b"0000810g", b"0x0081a4", b"-00081a4", b"0000 1a4"):
            with self.assertRaises(InvalidNumberError, msg=text):
                ByteCursor(text).take_hex_u32()

    def test_take_hex_truncated(self):
        with self.assertRaises(TruncatedError):
            ByteCursor(b"0000").take_hex_u32()

    def test_skip_clamps(self):
        c = ByteCursor(b"abc")
        c.skip(10)
        self.assertEqual(c.remaining(), b"")
        self.assertEqual(c.position, 10)
        with self.assertRaises(TruncatedError):
            c.take_byte()

    def test_skip_to_alignment(self):
        c = ByteCursor(b"x" * 16)
        c.skip_to_alignment(4)
        self.assertEqual(c.position, 0)
        c.skip(1)
        c.skip_to_alignment(4)
        self.assertEqual(c.position, 4)
        c.skip(3)
        c.skip_to_alignment(4)
        self.assertEqual(c.position, 8)
        c.skip_to_alignment(2)
        self.assertEqual(c.position, 8)

    def test_alignment_is_relative_to_cursor_start(self):
        data = memoryview(b"x" * 16)[3:]
        c = ByteCursor(data)
        c.skip(2)
        c.skip_to_alignment(4)
        self.assertEqual(c.position, 4)
        self.assertEqual(len(c.remaining()), 9)


if __name__ == "__main__":
    unittest.main()
