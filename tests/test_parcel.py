import pytest

from models.uri import EMPTY_URI, Uri
from parcel import INT32_MAX, INT32_MIN, Parcel


def _reader(writer: Parcel) -> Parcel:
    return Parcel(writer.marshall())


class TestParcel:
    """Tests for the Parcel transfer buffer."""

    def test_ints_read_back_in_write_order(self):
        """Test writing and reading several ints."""
        writer = Parcel()
        writer.write_int(7)
        writer.write_int(-3)
        writer.write_int(2**31 - 1)

        reader = _reader(writer)

        assert reader.read_int() == 7
        assert reader.read_int() == -3
        assert reader.read_int() == 2**31 - 1
        assert writer.data_size() == 12

    def test_int_range_limits(self):
        """Test that the signed 32-bit limits read back unchanged."""
        writer = Parcel()
        writer.write_int(INT32_MIN)
        writer.write_int(INT32_MAX)

        reader = _reader(writer)

        assert reader.read_int() == INT32_MIN
        assert reader.read_int() == INT32_MAX

    @pytest.mark.parametrize("value", [INT32_MAX + 1, INT32_MIN - 1, 0xFFFFFFFF])
    def test_int_out_of_range_raises(self, value):
        """Test that values wider than 32 bits are refused."""
        with pytest.raises(ValueError):
            Parcel().write_int(value)

    def test_strings_including_none_and_unicode(self):
        """Test string writes, including null and multi-byte text."""
        writer = Parcel()
        writer.write_string("alice@example.com")
        writer.write_string(None)
        writer.write_string("")
        writer.write_string("Grüße ✉")

        reader = _reader(writer)

        assert reader.read_string() == "alice@example.com"
        assert reader.read_string() is None
        assert reader.read_string() == ""
        assert reader.read_string() == "Grüße ✉"

    def test_uris(self):
        """Test URI writes; empty and null both read back as EMPTY_URI."""
        writer = Parcel()
        writer.write_uri(Uri.parse("content://mail/account/1"))
        writer.write_uri(EMPTY_URI)
        writer.write_uri(None)

        reader = _reader(writer)

        assert reader.read_uri() == Uri("content://mail/account/1")
        assert reader.read_uri() is EMPTY_URI
        assert reader.read_uri() is EMPTY_URI

    def test_reading_past_end_returns_zero_values(self):
        """Test that an exhausted buffer yields 0 and None instead of raising."""
        writer = Parcel()
        writer.write_int(1)

        reader = _reader(writer)

        assert reader.read_int() == 1
        assert reader.read_int() == 0
        assert reader.read_string() is None
        assert reader.read_uri() is EMPTY_URI

    def test_set_data_position_rewinds(self):
        """Test that the read cursor can be moved back to the start."""
        parcel = Parcel()
        parcel.write_string("again")
        parcel.set_data_position(0)

        assert parcel.read_string() == "again"
        assert parcel.data_position() == parcel.data_size()
        parcel.set_data_position(0)
        assert parcel.read_string() == "again"

    def test_string_with_partial_length_prefix_reads_as_none(self):
        """Test that a buffer cut inside a length prefix gives None."""
        writer = Parcel()
        writer.write_string("cut short")

        reader = Parcel(writer.marshall()[:2])

        assert reader.read_string() is None
        assert reader.data_position() == 2

    def test_string_with_lone_surrogate(self):
        """Test that text decoded from JSON escapes like \\ud800 is carried intact."""
        writer = Parcel()
        writer.write_string("name\ud800")

        assert _reader(writer).read_string() == "name\ud800"

    def test_invalid_utf8_is_replaced(self):
        """Test that undecodable bytes do not raise."""
        reader = Parcel(b"\x02\x00\x00\x00\xff\xfe")

        assert reader.read_string() == "\ufffd\ufffd"
