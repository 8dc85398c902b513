"""
Allow-list filters for values that are interpolated into code without
quotes, where escaping alone cannot keep them inert: CSS colors, numbers, and
URLs whose scheme decides whether they run code.

Each filter returns its input unchanged when it matches the allow-list and a
fallback otherwise.  The result still needs escaping for the context it is
embedded in.
"""

import re


# Returned by as_css_color for a value that is not a color.
INVALID_CSS_COLOR = 'invalid'

# Returned by as_number for a value that is not a number.
INVALID_NUMBER = '0'

# Prefixed to a rejected URL so that it is read as a relative path instead of
# a URL with a scheme.
RELATIVE_URL_PREFIX = './'

# CSS Color Module Level 4 named colors, lower case.
CSS_COLOR_NAMES = frozenset([
    "aliceblue", "antiquewhite", "aqua", "aquamarine", "azure", "beige",
    "bisque", "black", "blanchedalmond", "blue", "blueviolet", "brown",
    "burlywood", "cadetblue", "chartreuse", "chocolate", "coral",
    "cornflowerblue", "cornsilk", "crimson", "cyan", "darkblue", "darkcyan",
    "darkgoldenrod", "darkgray", "darkgreen", "darkgrey", "darkkhaki",
    "darkmagenta", "darkolivegreen", "darkorange", "darkorchid", "darkred",
    "darksalmon", "darkseagreen", "darkslateblue", "darkslategray",
    "darkslategrey", "darkturquoise", "darkviolet", "deeppink", "deepskyblue",
    "dimgray", "dimgrey", "dodgerblue", "firebrick", "floralwhite",
    "forestgreen", "fuchsia", "gainsboro", "ghostwhite", "gold", "goldenrod",
    "gray", "green", "greenyellow", "grey", "honeydew", "hotpink",
    "indianred", "indigo", "ivory", "khaki", "lavender", "lavenderblush",
    "lawngreen", "lemonchiffon", "lightblue", "lightcoral", "lightcyan",
    "lightgoldenrodyellow", "lightgray", "lightgreen", "lightgrey",
    "lightpink", "lightsalmon", "lightseagreen", "lightskyblue",
    "lightslategray", "lightslategrey", "lightsteelblue", "lightyellow",
    "lime", "limegreen", "linen", "magenta", "maroon", "mediumaquamarine",
    "mediumblue", "mediumorchid", "mediumpurple", "mediumseagreen",
    "mediumslateblue", "mediumspringgreen", "mediumturquoise",
    "mediumvioletred", "midnightblue", "mintcream", "mistyrose", "moccasin",
    "navajowhite", "navy", "oldlace", "olive", "olivedrab", "orange",
    "orangered", "orchid", "palegoldenrod", "palegreen", "paleturquoise",
    "palevioletred", "papayawhip", "peachpuff", "peru", "pink", "plum",
    "powderblue", "purple", "rebeccapurple", "red", "rosybrown", "royalblue",
    "saddlebrown", "salmon", "sandybrown", "seagreen", "seashell", "sienna",
    "silver", "skyblue", "slateblue", "slategray", "slategrey", "snow",
    "springgreen", "steelblue", "tan", "teal", "thistle", "tomato",
    "turquoise", "violet", "wheat", "white", "whitesmoke", "yellow",
    "yellowgreen"])

# Schemes that load code or content from a different origin.
UNSAFE_URL_SCHEMES = frozenset(["about", "data", "javascript", "vbscript"])

_CSS_HEX_COLOR = re.compile(r'\A#(?:[0-9A-Fa-f]{3}){1,2}\Z')

_DECIMAL_NUMBER = re.compile(r'\A[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)\Z')

_HEX_NUMBER = re.compile(r'\A0[xX][0-9A-Fa-f]+\Z')

# Zeros that would make a JS engine read "0777" as an octal literal.
_LEADING_ZEROS = re.compile(r'\A([+-]?)0+(?=[0-9])')

_SAFE_URL_SCHEME = re.compile(r'(?i)\A(?:https?|ftp|mailto):')

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_URL_SCHEME = re.compile(r'\A([A-Za-z][A-Za-z0-9+.\-]*):')

# A UNC path, or a reference without a scheme: no ':' before the first
# '/', '?' or '#'.  '&' and '\\' are rejected there since entity or path
# decoding could turn them into a scheme separator.
_URL_WITHOUT_SCHEME = re.compile(
    r'\A(?:\\\\|[^&:/?#\\\x00-\x1f\x7f]*(?:[/?#]|\Z))')


def _to_str(value):
    """Coerces None to the empty string and non-strings to strings."""
    if value is None:
        return ''
    if not isinstance(value, str):
        return str(value)
    return value


def as_css_color(color, default=INVALID_CSS_COLOR):
    """
    Filters out anything but a CSS named color or a #rgb or #rrggbb color.

    color - The untrusted color.
    default - Returned when color is not an allowed color.

    Returns color or default.
    """
    color = _to_str(color)
    if _CSS_HEX_COLOR.match(color) or color.lower() in CSS_COLOR_NAMES:
        return color
    return default


def as_number(number, default=INVALID_NUMBER):
    """
    Filters out anything but a signed decimal number or a 0x hex number.

    Leading zeros of an integer part are dropped, "0777" -> "777", so that
    the value means the same decimal number in JavaScript.

    number - The untrusted number.
    default - Returned when number is not an allowed number.

    Returns number, without octal-looking leading zeros, or default.
    """
    number = _to_str(number)
    if _HEX_NUMBER.match(number):
        return number
    if _DECIMAL_NUMBER.match(number):
        return _LEADING_ZEROS.sub(r'\1', number)
    return default


def as_url(url, default=None):
    """
    Filters out URLs that do not use http, https, ftp or mailto and are not
    relative, scheme-relative or UNC paths.

    url - The untrusted URL.
    default - Returned when url is not allowed.  If None, the url is
        returned with a "./" prefix so that it is treated as a relative
        path.

    Returns url or its fallback.
    """
    url = _to_str(url)
    if _SAFE_URL_SCHEME.match(url) or _URL_WITHOUT_SCHEME.match(url):
        return url
    return _url_fallback(url, default)


def as_flexible_url(url, default=None):
    """
    Like as_url, but allows any scheme except those in UNSAFE_URL_SCHEMES,
    e.g. "tel:" or "ftp:".

    url - The untrusted URL.
    default - Returned when url is not allowed.  If None, the url is
        returned with a "./" prefix so that it is treated as a relative
        path.

    Returns url or its fallback.
    """
    url = _to_str(url)
    scheme = _URL_SCHEME.match(url)
    if scheme is not None:
        if scheme.group(1).lower() not in UNSAFE_URL_SCHEMES:
            return url
    elif _URL_WITHOUT_SCHEME.match(url):
        return url
    return _url_fallback(url, default)


def _url_fallback(url, default):
    """The value returned for a rejected URL."""
    if default is None:
        return RELATIVE_URL_PREFIX + url
    return default
