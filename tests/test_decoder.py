"""
Unit tests for the payload decoder and codec registry.
"""

import base64

import pytest

from payload_parser.core import (
    CodecRegistry,
    DecodeError,
    DEFAULT_LAYOUT,
    LayoutError,
    PayloadDecoder,
    get_registry,
    register_codec,
)


class TestDefaultLayout:
    """Protocol version, temperature and humidity from a 5-byte payload."""

    def test_reference_payload(self):
        # 0x0961 = 2401, 0x1395 = 5013
        assert PayloadDecoder().decode("0109611395") == {
            "protocol_version": 1,
            "temperature": {"value": 24.01, "unit": "°C"},
            "humidity": {"value": 50.13, "unit": "%"},
        }

    def test_temperature_is_signed(self):
        data = PayloadDecoder().decode("01ff9c0000")
        assert data["temperature"]["value"] == -1.0

    def test_humidity_is_unsigned(self):
        data = PayloadDecoder().decode("000000ffff")
        assert data["humidity"]["value"] == 655.35

    def test_protocol_version_is_signed(self):
        assert PayloadDecoder().decode("ff00000000")["protocol_version"] == -1

    def test_trailing_bytes_are_ignored(self):
        assert PayloadDecoder().decode("0109611395aabbcc") == PayloadDecoder().decode("0109611395")

    def test_uppercase_hex(self):
        assert PayloadDecoder().decode("0109611395".upper())["protocol_version"] == 1

    def test_raw_bytes(self):
        assert PayloadDecoder().decode(bytes.fromhex("0109611395"))["humidity"]["value"] == 50.13

    def test_min_length(self):
        assert PayloadDecoder().min_length == 5


class TestDecodeFailures:
    """Every failure surfaces as DecodeError."""

    @pytest.mark.parametrize("raw", ["", "01", "01096113"])
    def test_short_payload(self, raw):
        with pytest.raises(DecodeError, match="too short"):
            PayloadDecoder().decode(raw)

    @pytest.mark.parametrize("raw", ["zz09611395", "010961139"])
    def test_malformed_hex(self, raw):
        with pytest.raises(DecodeError, match="Invalid hex"):
            PayloadDecoder().decode(raw)

    def test_non_string_payload(self):
        with pytest.raises(DecodeError, match="must be a string"):
            PayloadDecoder().decode(12345)

    def test_malformed_base64(self):
        with pytest.raises(DecodeError, match="Invalid base64"):
            PayloadDecoder(encoding="base64").decode("@@@")


class TestEncodings:
    def test_base64(self):
        raw = base64.b64encode(bytes.fromhex("0109611395")).decode()
        assert PayloadDecoder(encoding="base64").decode(raw) == PayloadDecoder().decode("0109611395")

    def test_unknown_encoding_rejected(self):
        with pytest.raises(LayoutError):
            PayloadDecoder(encoding="ascii85")


class TestCustomLayouts:
    """The byte layout is swappable."""

    def test_little_endian_layout_without_units(self):
        layout = {"fields": [{"name": "counter", "codec": "uint16le", "offset": 0}]}
        assert PayloadDecoder(layout).decode("3412") == {"counter": 0x1234}

    def test_divisor_without_unit_is_scalar(self):
        layout = {"fields": [{"name": "voltage", "codec": "uint16be", "offset": 1, "divisor": 1000}]}
        assert PayloadDecoder(layout).decode("000e1a") == {"voltage": 3.61}

    def test_float_codec(self):
        layout = {"fields": [{"name": "x", "codec": "float32be", "offset": 0}]}
        assert PayloadDecoder(layout).decode("3fc00000") == {"x": 1.5}

    def test_default_layout_is_not_modified(self):
        before = [dict(f) for f in DEFAULT_LAYOUT["fields"]]
        PayloadDecoder().decode("0109611395")
        assert DEFAULT_LAYOUT["fields"] == before

    @pytest.mark.parametrize("layout", [
        {},
        {"fields": []},
        {"fields": [{"codec": "int8", "offset": 0}]},
        {"fields": [{"name": "a", "codec": "int12", "offset": 0}]},
        {"fields": [{"name": "a", "codec": "int8", "offset": -1}]},
        {"fields": [{"name": "a", "codec": "int8"}]},
        {"fields": [{"name": "a", "codec": "int8", "offset": 0, "divisor": 0}]},
        {"fields": [{"name": "a", "codec": "int8", "offset": 0, "unit": 3}]},
        {"fields": [{"name": "a", "codec": "int8", "offset": 0}, {"name": "a", "codec": "int8", "offset": 1}]},
    ])
    def test_invalid_layouts(self, layout):
        with pytest.raises(LayoutError):
            PayloadDecoder(layout)


class TestCodecRegistry:
    def test_builtins_registered(self):
        assert {"int8", "uint8", "int16be", "uint16be", "int32le", "float32le"} <= get_registry().names

    def test_register_custom_codec(self):
        register_codec("int24be_test", 3, lambda chunk: int.from_bytes(chunk, "big", signed=True))
        layout = {"fields": [{"name": "pressure", "codec": "int24be_test", "offset": 0, "divisor": 100, "unit": "hPa"}]}
        assert PayloadDecoder(layout).decode("018b54") == {"pressure": {"value": 1012.04, "unit": "hPa"}}

    def test_private_registry(self):
        reg = CodecRegistry()
        reg.register("nibble_pair", 1, lambda chunk: chunk[0] >> 4)
        layout = {"fields": [{"name": "hi", "codec": "nibble_pair", "offset": 0}]}
        assert PayloadDecoder(layout, registry=reg).decode("a5") == {"hi": 10}
        assert "int8" not in reg

    @pytest.mark.parametrize("name,size,reader", [
        ("", 1, lambda c: 0),
        ("x", 0, lambda c: 0),
        ("x", 1, None),
    ])
    def test_register_rejects_bad_codecs(self, name, size, reader):
        with pytest.raises(ValueError):
            CodecRegistry().register(name, size, reader)

    def test_failing_reader_becomes_decode_error(self):
        reg = CodecRegistry()

        def boom(chunk):
            raise ValueError("bad firmware")

        reg.register("boom", 1, boom)
        decoder = PayloadDecoder({"fields": [{"name": "a", "codec": "boom", "offset": 0}]}, registry=reg)
        with pytest.raises(DecodeError, match="bad firmware"):
            decoder.decode("00")
