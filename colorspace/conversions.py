"""
Color space conversions with RGBA as the hub.
Supported views: hex, HSLA, HSVA, CMYK, LAB, HWB, LCH, plus the canonical
string rendering for each of the eleven format tags.
LAB/LCH use a fixed sRGB/D65 approximation, not gamut-aware conversion.
"""

import math
import re
from decimal import Decimal
from typing import Dict

from .models import CMYK, HSLA, HSVA, HWB, LAB, LCH, RGBA, SUPPORTED_FORMATS


def clamp(v: float, lo: float, hi: float) -> float:
    """Clamp value between lo and hi."""
    return max(lo, min(hi, v))


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away towards +infinity."""
    return int(math.floor(x + 0.5))


def wrap_hue(h: float) -> float:
    """Wrap a hue in degrees into [0, 360)."""
    h = h % 360
    # tiny negatives round up to exactly 360.0
    return 0.0 if h >= 360 else h


def format_number(x: float) -> str:
    """Render a number the way the browser does: no trailing .0 on integers."""
    x = float(x)
    if x.is_integer():
        return str(int(x))
    text = repr(x)
    if "e" in text:
        # positional, as the tokenizer cannot read exponents
        text = format(Decimal(text), "f")
    return text


def _hue_turn(r: float, g: float, b: float, max_val: float, diff: float) -> float:
    """Hue as a fraction of a turn, from the channel holding the maximum."""
    if diff == 0:
        return 0.0
    if max_val == r:
        h = (g - b) / diff + (6 if g < b else 0)
    elif max_val == g:
        h = (b - r) / diff + 2
    else:
        h = (r - g) / diff + 4
    return h / 6


# HEX -------------------------------------------------------------

HEX_RE = re.compile(r"[0-9a-f]{3}|[0-9a-f]{6}", re.IGNORECASE)


def is_valid_hex(s: str) -> bool:
    """Check for exactly 3 or 6 hex digits, optional leading #."""
    return bool(HEX_RE.fullmatch(s[1:] if s.startswith("#") else s))


def rgba_to_hex(rgba: RGBA) -> str:
    """Convert RGBA to an opaque #rrggbb string."""
    def h(n: float) -> str:
        return format(round_half_up(n), "02x")

    return f"#{h(rgba.r)}{h(rgba.g)}{h(rgba.b)}"


def hex_to_rgba(s: str, alpha: float = 1.0) -> RGBA:
    """Convert hex string to RGBA. Anything that is not 3 or 6 hex digits is opaque black."""
    clean = s[1:] if s.startswith("#") else s
    if not is_valid_hex(clean):
        return RGBA(r=0, g=0, b=0, a=1.0)
    if len(clean) == 3:
        clean = "".join(c + c for c in clean)
    return RGBA(
        r=int(clean[0:2], 16),
        g=int(clean[2:4], 16),
        b=int(clean[4:6], 16),
        a=alpha,
    )


# HSL -------------------------------------------------------------

def rgba_to_hsla(rgba: RGBA) -> HSLA:
    """Convert RGBA to HSLA."""
    r, g, b = rgba.r / 255, rgba.g / 255, rgba.b / 255
    max_val = max(r, g, b)
    min_val = min(r, g, b)
    diff = max_val - min_val
    total = max_val + min_val
    l = total / 2

    s = 0.0
    if diff != 0:
        # Switch formula near the lightness extremes to keep the denominator away from zero
        s = diff / (2 - total) if l > 0.5 else diff / total
    h = _hue_turn(r, g, b, max_val, diff)

    return HSLA(
        h=round_half_up(h * 360) % 360,
        s=clamp(round_half_up(s * 100), 0, 100),
        l=clamp(round_half_up(l * 100), 0, 100),
        a=rgba.a,
    )


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsla_to_rgba(hsla: HSLA) -> RGBA:
    """Convert HSLA to RGBA."""
    h = hsla.h / 360
    s = hsla.s / 100
    l = hsla.l / 100

    if s == 0:
        gray = round_half_up(l * 255)
        return RGBA(r=gray, g=gray, b=gray, a=hsla.a)

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q

    return RGBA(
        r=round_half_up(_hue_to_rgb(p, q, h + 1 / 3) * 255),
        g=round_half_up(_hue_to_rgb(p, q, h) * 255),
        b=round_half_up(_hue_to_rgb(p, q, h - 1 / 3) * 255),
        a=hsla.a,
    )


# HSV -------------------------------------------------------------

def rgba_to_hsva(rgba: RGBA) -> HSVA:
    """Convert RGBA to HSVA."""
    r, g, b = rgba.r / 255, rgba.g / 255, rgba.b / 255
    max_val = max(r, g, b)
    min_val = min(r, g, b)
    diff = max_val - min_val

    s = 0.0 if max_val == 0 else diff / max_val
    h = _hue_turn(r, g, b, max_val, diff)

    return HSVA(
        h=round_half_up(h * 360) % 360,
        s=clamp(round_half_up(s * 100), 0, 100),
        v=clamp(round_half_up(max_val * 100), 0, 100),
        a=rgba.a,
    )


def hsva_to_rgba(hsva: HSVA) -> RGBA:
    """Convert HSVA to RGBA using the sector index method."""
    h = hsva.h / 360
    s = hsva.s / 100
    v = hsva.v / 100

    i = math.floor(h * 6)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    sector = i % 6
    if sector == 0:
        r, g, b = v, t, p
    elif sector == 1:
        r, g, b = q, v, p
    elif sector == 2:
        r, g, b = p, v, t
    elif sector == 3:
        r, g, b = p, q, v
    elif sector == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return RGBA(
        r=round_half_up(r * 255),
        g=round_half_up(g * 255),
        b=round_half_up(b * 255),
        a=hsva.a,
    )


# CMYK ------------------------------------------------------------

def rgba_to_cmyk(rgba: RGBA) -> CMYK:
    """Convert RGBA to CMYK. Alpha is dropped."""
    r, g, b = rgba.r / 255, rgba.g / 255, rgba.b / 255
    k = 1 - max(r, g, b)

    if k == 1:
        return CMYK(c=0, m=0, y=0, k=100)

    c = (1 - r - k) / (1 - k)
    m = (1 - g - k) / (1 - k)
    y = (1 - b - k) / (1 - k)

    return CMYK(
        c=clamp(round_half_up(c * 100), 0, 100),
        m=clamp(round_half_up(m * 100), 0, 100),
        y=clamp(round_half_up(y * 100), 0, 100),
        k=clamp(round_half_up(k * 100), 0, 100),
    )


def cmyk_to_rgba(cmyk: CMYK, alpha: float = 1.0) -> RGBA:
    """Convert CMYK to RGBA."""
    c, m, y, k = cmyk.c / 100, cmyk.m / 100, cmyk.y / 100, cmyk.k / 100
    return RGBA(
        r=round_half_up(255 * (1 - c) * (1 - k)),
        g=round_half_up(255 * (1 - m) * (1 - k)),
        b=round_half_up(255 * (1 - y) * (1 - k)),
        a=alpha,
    )


# LAB -------------------------------------------------------------

# D65 reference white
XR, YR, ZR = 0.95047, 1.0, 1.08883
LAB_EPSILON = 0.008856
LAB_KAPPA = 7.787
LAB_BIAS = 16 / 116


def s_to_lin(c: float) -> float:
    """Inverse sRGB companding of a [0,1] channel."""
    return ((c + 0.055) / 1.055) ** 2.4 if c > 0.04045 else c / 12.92


def lin_to_s(c: float) -> float:
    """sRGB companding of a linear channel."""
    return 1.055 * c ** (1 / 2.4) - 0.055 if c > 0.0031308 else 12.92 * c


def f_lab(t: float) -> float:
    """LAB forward transform."""
    return t ** (1 / 3) if t > LAB_EPSILON else LAB_KAPPA * t + LAB_BIAS


def f_inv_lab(t: float) -> float:
    """LAB inverse transform."""
    t3 = t ** 3
    return t3 if t3 > LAB_EPSILON else (t - LAB_BIAS) / LAB_KAPPA


def rgba_to_lab(rgba: RGBA) -> LAB:
    """Convert RGBA to LAB. Alpha is dropped."""
    r = s_to_lin(rgba.r / 255)
    g = s_to_lin(rgba.g / 255)
    b = s_to_lin(rgba.b / 255)

    x = (r * 0.4124 + g * 0.3576 + b * 0.1805) / XR
    y = (r * 0.2126 + g * 0.7152 + b * 0.0722) / YR
    z = (r * 0.0193 + g * 0.1192 + b * 0.9505) / ZR

    fx, fy, fz = f_lab(x), f_lab(y), f_lab(z)

    return LAB(
        l=clamp(round_half_up(116 * fy - 16), 0, 100),
        a=clamp(round_half_up(500 * (fx - fy)), -128, 127),
        b=clamp(round_half_up(200 * (fy - fz)), -128, 127),
    )


def _lab_values_to_rgba(l: float, a: float, b: float, alpha: float) -> RGBA:
    fy = (l + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    x = f_inv_lab(fx) * XR
    y = f_inv_lab(fy) * YR
    z = f_inv_lab(fz) * ZR

    r = x * 3.2406 + y * -1.5372 + z * -0.4986
    g = x * -0.9689 + y * 1.8758 + z * 0.0415
    bl = x * 0.0557 + y * -0.204 + z * 1.057

    # LAB reaches outside the sRGB gamut
    return RGBA(
        r=round_half_up(clamp(lin_to_s(r), 0, 1) * 255),
        g=round_half_up(clamp(lin_to_s(g), 0, 1) * 255),
        b=round_half_up(clamp(lin_to_s(bl), 0, 1) * 255),
        a=alpha,
    )


def lab_to_rgba(lab: LAB, alpha: float = 1.0) -> RGBA:
    """Convert LAB to RGBA, clamping to the sRGB gamut."""
    return _lab_values_to_rgba(lab.l, lab.a, lab.b, alpha)


# HWB -------------------------------------------------------------

def rgba_to_hwb(rgba: RGBA) -> HWB:
    """Convert RGBA to HWB via HSVA. Alpha is dropped."""
    hsv = rgba_to_hsva(rgba)
    w = (100 - hsv.s) * hsv.v / 100
    b = 100 - hsv.v
    return HWB(h=hsv.h, w=clamp(round_half_up(w), 0, 100), b=clamp(round_half_up(b), 0, 100))


def hwb_to_rgba(hwb: HWB, alpha: float = 1.0) -> RGBA:
    """Convert HWB to RGBA. Whiteness plus blackness of 100% or more is a gray."""
    w = hwb.w / 100
    b = hwb.b / 100

    ratio = w + b
    if ratio >= 1:
        gray = round_half_up(255 * w / ratio)
        return RGBA(r=gray, g=gray, b=gray, a=alpha)

    v = 1 - b
    s = 0 if v == 0 else 1 - w / v
    return hsva_to_rgba(HSVA(h=hwb.h, s=s * 100, v=v * 100, a=alpha))


# LCH -------------------------------------------------------------

def rgba_to_lch(rgba: RGBA) -> LCH:
    """Convert RGBA to LCH (polar LAB). Alpha is dropped."""
    lab = rgba_to_lab(rgba)
    c = math.hypot(lab.a, lab.b)
    h = math.degrees(math.atan2(lab.b, lab.a))
    if h < 0:
        h += 360
    return LCH(
        l=lab.l,
        c=clamp(round_half_up(c), 0, 150),
        h=round_half_up(h) % 360,
    )


def lch_to_rgba(lch: LCH, alpha: float = 1.0) -> RGBA:
    """Convert LCH to RGBA through LAB."""
    hr = math.radians(lch.h)
    a = round_half_up(lch.c * math.cos(hr))
    b = round_half_up(lch.c * math.sin(hr))
    return _lab_values_to_rgba(lch.l, a, b, alpha)


# Formatting ------------------------------------------------------

def rgba_to_css_string(rgba: RGBA) -> str:
    """Convert RGBA to a CSS string, eliding alpha when fully opaque."""
    if rgba.a == 1:
        return f"rgb({rgba.r}, {rgba.g}, {rgba.b})"
    return f"rgba({rgba.r}, {rgba.g}, {rgba.b}, {format_number(rgba.a)})"


def format_color_string(rgba: RGBA, target: str) -> str:
    """Render RGBA in the canonical string form of a format tag."""
    n = format_number
    if target == "hex":
        return rgba_to_hex(rgba)
    elif target == "rgb":
        return f"rgb({rgba.r}, {rgba.g}, {rgba.b})"
    elif target == "rgba":
        return rgba_to_css_string(rgba)
    elif target == "hsl":
        hsl = rgba_to_hsla(rgba)
        return f"hsl({n(hsl.h)}, {n(hsl.s)}%, {n(hsl.l)}%)"
    elif target == "hsla":
        hsl = rgba_to_hsla(rgba)
        return f"hsla({n(hsl.h)}, {n(hsl.s)}%, {n(hsl.l)}%, {n(hsl.a)})"
    elif target == "hsv":
        hsv = rgba_to_hsva(rgba)
        return f"hsv({n(hsv.h)}, {n(hsv.s)}%, {n(hsv.v)}%)"
    elif target == "hsva":
        hsv = rgba_to_hsva(rgba)
        return f"hsva({n(hsv.h)}, {n(hsv.s)}%, {n(hsv.v)}%, {n(hsv.a)})"
    elif target == "cmyk":
        cmyk = rgba_to_cmyk(rgba)
        return f"cmyk({n(cmyk.c)}%, {n(cmyk.m)}%, {n(cmyk.y)}%, {n(cmyk.k)}%)"
    elif target == "lab":
        lab = rgba_to_lab(rgba)
        return f"lab({n(lab.l)}, {n(lab.a)}, {n(lab.b)})"
    elif target == "hwb":
        hwb = rgba_to_hwb(rgba)
        return f"hwb({n(hwb.h)}, {n(hwb.w)}%, {n(hwb.b)}%)"
    elif target == "lch":
        lch = rgba_to_lch(rgba)
        return f"lch({n(lch.l)}, {n(lch.c)}, {n(lch.h)})"
    else:
        return rgba_to_css_string(rgba)


def format_all(rgba: RGBA) -> Dict[str, str]:
    """Render RGBA in every supported format."""
    return {target: format_color_string(rgba, target) for target in SUPPORTED_FORMATS}
