"""
Unit tests for layout validation.
"""

import pytest

from payload_parser.core import DEFAULT_LAYOUT, LayoutError
from payload_parser.validation import validate_layout


class TestValidateLayout:

    def test_default_layout_is_valid(self):
        assert validate_layout(DEFAULT_LAYOUT) == (True, [])

    def test_reports_all_errors(self):
        layout = {
            "fields": [
                {"name": "temperature", "codec": "int16be", "offset": 0, "divisor": 0},
                {"name": "temperature", "codec": "int12", "offset": -1, "unit": 5, "scale": 2},
            ]
        }
        ok, errs = validate_layout(layout)
        assert not ok
        joined = "\n".join(errs)
        assert "$.fields[0].divisor" in joined
        assert "$.fields[1].name: Duplicate field name 'temperature'" in joined
        assert "$.fields[1].codec" in joined
        assert "$.fields[1].offset" in joined
        assert "$.fields[1].unit" in joined
        assert "Unknown keys in field: ['scale']" in joined

    def test_overlapping_fields(self):
        layout = {
            "fields": [
                {"name": "a", "codec": "uint32be", "offset": 0},
                {"name": "b", "codec": "uint8", "offset": 1},
                {"name": "c", "codec": "uint8", "offset": 3},
                {"name": "d", "codec": "uint8", "offset": 4},
            ]
        }
        ok, errs = validate_layout(layout)
        assert not ok
        assert len(errs) == 2
        assert "'a' and 'b' overlap at byte 1" in errs[0]
        assert "'a' and 'c' overlap at byte 3" in errs[1]

    @pytest.mark.parametrize("layout", [None, [], {}, {"fields": []}, {"fields": "x"}])
    def test_structural_errors(self, layout):
        ok, errs = validate_layout(layout)
        assert not ok
        assert len(errs) == 1

    def test_non_object_field(self):
        ok, errs = validate_layout({"fields": [42]})
        assert errs == ["$.fields[0]: Field must be an object."]

    def test_unknown_encoding(self):
        ok, errs = validate_layout(DEFAULT_LAYOUT, encoding="ascii85")
        assert not ok
        assert errs[0].startswith("$.encoding")

    def test_raise_on_error(self):
        with pytest.raises(LayoutError, match="Invalid layout"):
            validate_layout({"fields": []}, raise_on_error=True)
