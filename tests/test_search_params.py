"""Tests for parsing color/export requests from search params."""

import pytest

from colorspace.models import SUPPORTED_FORMATS
from parsers.search_params import (
    build_export_request,
    extract_numeric_values,
    normalize_alpha,
    parse_color_request,
    parse_color_value,
)


def rgb_of(parsed):
    return (parsed.color.r, parsed.color.g, parsed.color.b)


class TestDefaults:

    def test_empty_params(self):
        parsed = parse_color_request({})
        assert parsed.active is False
        assert parsed.color is None
        assert parsed.format is None
        assert (parsed.size.width, parsed.size.height) == (512, 512)
        assert parsed.download is False
        assert parsed.extension == "png"
        assert parsed.errors == ()
        assert parsed.ok

    def test_unrelated_keys_are_inactive(self):
        assert parse_color_request({"utm_source": "mail"}).active is False

    def test_caller_supplied_size_defaults(self):
        parsed = parse_color_request({}, default_width=100, default_height=200)
        assert (parsed.size.width, parsed.size.height) == (100, 200)


class TestErrorAccumulation:

    def test_one_error_per_malformed_field(self):
        parsed = parse_color_request({"format": "bogus", "size": "abc", "download": "maybe"})
        assert len(parsed.errors) == 3
        assert parsed.errors[0] == "`download` parameter must be true or false."
        assert parsed.errors[1] == "`size` parameter must follow the `widthxheight` pattern."
        assert parsed.errors[2] == (
            "Invalid format: bogus. Supported formats: " + ", ".join(SUPPORTED_FORMATS)
        )
        assert parsed.active is True
        assert parsed.color is None

    def test_every_stage_reports(self):
        parsed = parse_color_request({
            "format": "rgb",
            "formatValue": "12",
            "size": "x",
            "download": "nah",
            "extension": "bmp",
        })
        assert parsed.errors == (
            "Invalid extension: bmp. Supported values: png, jpeg, svg.",
            "`download` parameter must be true or false.",
            "`size` parameter must follow the `widthxheight` pattern.",
            "Expected 3 value(s) but could not parse them from: 12",
        )
        # Defaults still resolved
        assert (parsed.size.width, parsed.size.height) == (512, 512)
        assert parsed.extension == "png"
        assert parsed.download is False

    def test_active_without_color_keys(self):
        parsed = parse_color_request({"size": "1280x720"})
        assert parsed.active is True
        assert parsed.errors == ("`format` and `formatValue` parameters are required.",)
        assert (parsed.size.width, parsed.size.height) == (1280, 720)

    def test_empty_values_still_count_as_present(self):
        parsed = parse_color_request({"format": ""})
        assert parsed.active is True
        assert parsed.errors == ("`format` and `formatValue` parameters are required.",)

    def test_format_without_value(self):
        parsed = parse_color_request({"format": "hex"})
        assert parsed.errors == ("`formatValue` parameter is required.",)
        assert parsed.color is None

    def test_value_without_format(self):
        parsed = parse_color_request({"formatValue": "ff5733"})
        assert len(parsed.errors) == 1
        assert parsed.errors[0].startswith("`format` parameter is missing. Supported formats: hex, rgb")


class TestExtension:

    @pytest.mark.parametrize("raw,expected", [
        ("png", "png"),
        ("JPG", "jpeg"),
        ("jpeg", "jpeg"),
        (" svg ", "svg"),
    ])
    def test_accepted(self, raw, expected):
        parsed = parse_color_request({"extension": raw, "format": "hex", "formatValue": "000"})
        assert parsed.extension == expected
        assert parsed.ok

    def test_rejected_names_value(self):
        parsed = parse_color_request({"extension": "gif"})
        assert "Invalid extension: gif. Supported values: png, jpeg, svg." in parsed.errors
        assert parsed.extension == "png"


class TestDownload:

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("YES", True), ("1", True),
        ("false", False), ("No", False), ("0", False),
    ])
    def test_literals(self, raw, expected):
        parsed = parse_color_request({"download": raw})
        assert parsed.download is expected
        assert "`download` parameter must be true or false." not in parsed.errors


class TestSize:

    @pytest.mark.parametrize("raw,expected", [
        ("1280x720", (1280, 720)),
        ("1280 X 720", (1280, 720)),
        ("  64x32 ", (64, 32)),
    ])
    def test_valid(self, raw, expected):
        parsed = parse_color_request({"size": raw})
        assert (parsed.size.width, parsed.size.height) == expected

    def test_non_positive(self):
        parsed = parse_color_request({"size": "0x10"})
        assert "`size` parameter must contain positive numbers." in parsed.errors
        assert (parsed.size.width, parsed.size.height) == (512, 512)

    @pytest.mark.parametrize("raw", ["12x", "-5x5", "1.5x2", "axb"])
    def test_malformed(self, raw):
        parsed = parse_color_request({"size": raw})
        assert "`size` parameter must follow the `widthxheight` pattern." in parsed.errors

    def test_cap_is_a_size_error(self):
        parsed = parse_color_request({"size": "5000x10"}, max_dimension=4096)
        assert parsed.errors == (
            "`size` parameter must not exceed 4096x4096.",
            "`format` and `formatValue` parameters are required.",
        )
        assert (parsed.size.width, parsed.size.height) == (512, 512)

    def test_cap_is_inclusive(self):
        parsed = parse_color_request({"size": "4096x4096"}, max_dimension=4096)
        assert (parsed.size.width, parsed.size.height) == (4096, 4096)

    def test_uncapped_by_default(self):
        parsed = parse_color_request({"size": "100000x1"})
        assert (parsed.size.width, parsed.size.height) == (100000, 1)


class TestColorValues:

    def test_hex_without_hash(self):
        parsed = parse_color_request({"format": "hex", "formatValue": "ff5733"})
        assert parsed.ok
        assert parsed.format == "hex"
        assert rgb_of(parsed) == (255, 87, 51)
        assert parsed.color.a == 1.0

    def test_hex_is_not_strict(self):
        color, error = parse_color_value("hex", "not-a-color")
        assert error is None
        assert (color.r, color.g, color.b) == (0, 0, 0)

    def test_format_is_case_insensitive(self):
        parsed = parse_color_request({"format": " RGBA ", "formatValue": "255, 87, 34, 0.5"})
        assert parsed.format == "rgba"
        assert parsed.color.a == 0.5

    def test_rgb_clamps(self):
        color, _ = parse_color_value("rgb", "300, -5, 34")
        assert (color.r, color.g, color.b) == (255, 0, 34)

    def test_rgb_percent(self):
        color, _ = parse_color_value("rgb", "100%, 0%, 0%")
        assert (color.r, color.g, color.b) == (255, 0, 0)

    def test_rgb_accepts_css_function(self):
        color, _ = parse_color_value("rgb", "rgb(255, 87, 34)")
        assert (color.r, color.g, color.b, color.a) == (255, 87, 34, 1.0)

    def test_rgba_without_alpha_is_opaque(self):
        color, error = parse_color_value("rgba", "255,87,34")
        assert error is None
        assert color.a == 1.0

    def test_rgba_shortfall(self):
        color, error = parse_color_value("rgba", "255,87")
        assert color is None
        assert error == "Expected 3 value(s) but could not parse them from: 255,87"

    def test_cmyk_needs_four_values(self):
        color, error = parse_color_value("cmyk", "0,66,87")
        assert color is None
        assert error == "Expected 4 value(s) but could not parse them from: 0,66,87"

    def test_declared_format_kept_when_value_fails(self):
        parsed = parse_color_request({"format": "cmyk", "formatValue": "1,2"})
        assert parsed.format == "cmyk"
        assert parsed.color is None

    def test_hsl_wraps_negative_hue(self):
        color, _ = parse_color_value("hsl", "-346, 100%, 57%")
        assert (color.r, color.g, color.b) == (255, 87, 36)

    def test_hsla(self):
        color, _ = parse_color_value("hsla", "hsla(14, 100%, 57%, 0.5)")
        assert (color.r, color.g, color.b, color.a) == (255, 87, 36, 0.5)

    def test_hsl_ignores_alpha_token(self):
        color, _ = parse_color_value("hsl", "14, 100, 57, 0.5")
        assert color.a == 1.0

    def test_hsv(self):
        color, _ = parse_color_value("hsv", "14, 87, 100")
        assert (color.r, color.g, color.b) == (255, 85, 33)

    def test_hsva_percent_alpha(self):
        color, _ = parse_color_value("hsva", "14, 87, 100, 40%")
        assert color.a == pytest.approx(0.4)

    def test_cmyk(self):
        color, _ = parse_color_value("cmyk", "cmyk(0%, 66%, 87%, 0%)")
        assert (color.r, color.g, color.b) == (255, 87, 33)

    def test_cmyk_clamps_components(self):
        color, _ = parse_color_value("cmyk", "0, 0, 0, 250")
        assert (color.r, color.g, color.b) == (0, 0, 0)

    def test_lab(self):
        color, _ = parse_color_value("lab", "lab(100, 0, 0)")
        assert all(abs(c - 255) <= 1 for c in (color.r, color.g, color.b))

    def test_lab_clamps_out_of_range(self):
        color, error = parse_color_value("lab", "150, 300, -300")
        assert error is None
        assert all(0 <= c <= 255 for c in (color.r, color.g, color.b))

    def test_hwb_degenerate_is_gray(self):
        color, _ = parse_color_value("hwb", "0, 60, 60")
        assert (color.r, color.g, color.b) == (128, 128, 128)

    def test_lch_hue_wraps(self):
        wrapped, _ = parse_color_value("lch", "50, 40, 400")
        plain, _ = parse_color_value("lch", "50, 40, 40")
        assert wrapped == plain

    def test_lch_clamps_chroma(self):
        clamped, _ = parse_color_value("lch", "50, 500, 10")
        limit, _ = parse_color_value("lch", "50, 150, 10")
        assert clamped == limit

    def test_unsupported_format(self):
        color, error = parse_color_value("oklch", "1, 2, 3")
        assert color is None
        assert error == "Unsupported format: oklch"


class TestAlphaHeuristic:
    """Bare alpha above 1 is read as a percentage; kept literally for share-link compatibility."""

    @pytest.mark.parametrize("raw,expected", [
        ("0.25", 0.25),
        ("1", 1.0),
        ("50", 0.5),
        ("1.5", 0.015),
        ("150", 1.0),
        ("40%", 0.4),
        ("-3", 0.0),
    ])
    def test_rgba_alpha(self, raw, expected):
        color, _ = parse_color_value("rgba", f"255, 87, 34, {raw}")
        assert color.a == pytest.approx(expected)

    def test_missing_alpha_is_opaque(self):
        assert normalize_alpha(None) == 1.0


class TestTokenizer:

    def test_tracks_percent(self):
        components, error = extract_numeric_values("10%, -2.5 .5", 3)
        assert error is None
        assert [(c.value, c.is_percent) for c in components] == [(10.0, True), (-2.5, False), (0.5, False)]

    def test_shortfall(self):
        components, error = extract_numeric_values("abc", 3)
        assert components == []
        assert error == "Expected 3 value(s) but could not parse them from: abc"


class TestExportRequest:

    def test_jpeg_gets_default_quality(self):
        parsed = parse_color_request({"format": "hex", "formatValue": "ff5722", "extension": "jpg", "size": "20x10"})
        export = build_export_request(parsed)
        assert export.image_format == "jpeg"
        assert export.quality == 0.9
        assert (export.width, export.height) == (20, 10)
        assert export.color == parsed.color

    def test_quality_only_for_jpeg(self):
        parsed = parse_color_request({"format": "hex", "formatValue": "ff5722", "extension": "svg"})
        assert build_export_request(parsed, quality=0.5).quality is None

    def test_no_color_no_export(self):
        assert build_export_request(parse_color_request({"size": "10x10"})) is None


HOSTILE_VALUES = [
    "9" * 400 + ",0,0,0",
    "0," + "9" * 400 + "," + "9" * 400 + ",0",
    "-" + "9" * 400 + ",50,50,50",
    "-0.00000000000000000001,50,50,50",
    "-360,-0,-0,-0",
    "359.99999999999999999,100%,100%,100%",
    "abc\n",
    "#abc\n",
    " ff 57 33 ",
    "\x00\t\n",
    "1e400,2,3,4",
    "%,%,%,%",
    "....,----,,,",
    "",
]


class TestHostileInput:
    """Malformed values end up in `errors` or as a clamped color, never as an exception."""

    @pytest.mark.parametrize("fmt", SUPPORTED_FORMATS)
    @pytest.mark.parametrize("value", HOSTILE_VALUES)
    def test_never_raises(self, fmt, value):
        parsed = parse_color_request({"format": fmt, "formatValue": value})
        assert parsed.active is True
        assert (parsed.color is None) == (not parsed.ok)
        if parsed.color is not None:
            assert all(0 <= c <= 255 for c in (parsed.color.r, parsed.color.g, parsed.color.b))
            assert 0 <= parsed.color.a <= 1

    @pytest.mark.parametrize("fmt", [f for f in SUPPORTED_FORMATS if f != "hex"])
    def test_oversized_token_is_invalid_numeric(self, fmt):
        value = ",".join(["9" * 400] * 4)
        color, error = parse_color_value(fmt, value)
        assert color is None
        assert error == f"Invalid numeric value in: {value}"

    def test_negative_zero_hue_wraps_to_zero(self):
        tiny, error = parse_color_value("hsl", "-0.00000000000000000001, 50, 50")
        assert error is None
        assert tiny == parse_color_value("hsl", "0, 50, 50")[0]

    def test_hex_with_trailing_newline_is_trimmed(self):
        color, error = parse_color_value("hex", "ff5733\n")
        assert error is None
        assert (color.r, color.g, color.b) == (255, 87, 51)
