#!/usr/bin/env python

"""
Definitions of contextual escaping functions.

Each escaper makes an untrusted string safe to embed in one syntactic context
and corresponds to one of the ESC_MODE_* values below.  When a value crosses
several contexts, apply the escaper for the innermost context first:

    escape_html(escape_css_string(escape_uri(value)))

for a URL inside a CSS string inside an HTML attribute.  Each escaper's output
only uses characters that the next outer escaper either passes through
unchanged or itself encodes, so nesting never reintroduces a breakout.
"""

import functools
import re


# Encodes HTML special characters, whitespace and '/' so that the value can
# appear in text, in a quoted or unquoted attribute value, or as part of a tag
# or attribute name.
ESC_MODE_HTML = 0

# Encodes only '<', '>', '&' and quotes.  Safe for text and for attribute
# values that are always quoted.
ESC_MODE_HTML_TEXT = 1

# Encodes quotes, newlines and HTML special characters so that the value can
# appear inside a quoted JS string in an inline <script>.
ESC_MODE_JS_STRING = 2

# Like ESC_MODE_JS_STRING but additionally escapes RegExp specials like
# ".+*?$^[](){}".
ESC_MODE_JS_REGEX = 3

# Encodes quotes, newlines, backslashes and the characters of "</style" using
# CSS hex escapes so that the value can appear in a quoted CSS string.
ESC_MODE_CSS_STRING = 4

# Percent encodes everything except unreserved characters and '/'.
ESC_MODE_URI = 5

# Percent encodes everything except unreserved characters.
# This is stricter than the JavaScript function encodeURIComponent.
ESC_MODE_URI_COMPONENT = 6

# Prefixes the LIKE wildcards '%' and '_' and the escape character itself
# with the escape character.
ESC_MODE_SQL_LIKE_CLAUSE = 7

# One greater than the max of ESC_MODE_*.
COUNT_OF_ESC_MODES = 8

# Contains pairs such that (f, g) is in this set only if g(f(x)) == f(x) for
# all x, so g can be skipped when applied directly after f.
REDUNDANT_ESC_MODES = frozenset([
    (ESC_MODE_CSS_STRING, ESC_MODE_HTML_TEXT),
    (ESC_MODE_JS_STRING, ESC_MODE_HTML_TEXT),
    (ESC_MODE_JS_REGEX, ESC_MODE_HTML_TEXT),
    (ESC_MODE_URI, ESC_MODE_HTML_TEXT),
    (ESC_MODE_URI_COMPONENT, ESC_MODE_HTML_TEXT),
    (ESC_MODE_URI_COMPONENT, ESC_MODE_HTML),
    (ESC_MODE_URI_COMPONENT, ESC_MODE_CSS_STRING),
    ])

# The escape character used by escape_sql_like_clause when none is given.
DEFAULT_SQL_LIKE_ESCAPE_CHAR = '@'


def _char_range(first, last):
    """The characters with code points in [ord(first), ord(last)]."""
    return ''.join([chr(code) for code in range(ord(first), ord(last) + 1)])


_C0_CONTROLS = _char_range('\x00', '\x1f')

# Sensitive character tables.  A table may gain characters but must never
# lose one: a character a parser treats as structural in that context has to
# stay encoded.

# '\n', '\r', '\f', tab and space end unquoted attribute values and attribute
# names, as does '/'.  '=' and '`' matter to attribute parsing in old
# browsers.  NUL becomes "&#0;", which HTML5 parsers decode to U+FFFD.
SENSITIVE_FOR_HTML = (
    _C0_CONTROLS + ' "&\'/<=>\\`\x7f\x85\u2028\u2029')

SENSITIVE_FOR_HTML_TEXT = '"&\'<>'

# '<', '>' and '/' keep "</script" and "-->" out of inline scripts, '&' stops
# entity decoding in XHTML, '%' stops reinterpretation by percent-decoding
# layers, and '+' and '=' are UTF-7 specials.
SENSITIVE_FOR_JS_STRING = (
    _C0_CONTROLS + '"%&\'+/<=>\\`\x7f\x85\u2028\u2029')

SENSITIVE_FOR_JS_REGEX = SENSITIVE_FOR_JS_STRING + '!#$()*,-.:?[]^{|}'

SENSITIVE_FOR_CSS_STRING = (
    _C0_CONTROLS + '"&\'()*/:;<=>@\\{}\x7f\x85\xa0\u2028\u2029')

# unreserved  = ALPHA / DIGIT / "-" / "." / "_" / "~"
URI_COMPONENT_SAFE = (
    _char_range('0', '9') + _char_range('A', 'Z') + _char_range('a', 'z')
    + '-._~')

# ':' is not passed through, so "javascript:" and "data:" stay inert.
URI_SAFE = URI_COMPONENT_SAFE + '/'


def _class_body(chars):
    """The body of a regex character class matching the given characters."""
    return ''.join([r'\U%08x' % ord(char) for char in chars])


def _char_class(chars):
    """A regex that matches any one of the given characters."""
    return re.compile('[%s]' % _class_body(chars))


def _escape_map(chars, encode):
    """Maps each of the given characters to encode(char)."""
    return dict([(char, encode(char)) for char in chars])


def _numeric_character_reference(char):
    """ '<' -> '&#60;' """
    return '&#%d;' % ord(char)


# Characters with a short escape form.  Every other sensitive character is
# written as a \u escape.  Quotes are too, so escaped text
# never contains a quote, and so are line terminators since "\n" is turned
# back into a raw newline by some embedding layers before the JS parser sees
# it.  The output is also a valid JSON string body.
_SHORT_ESCAPES_FOR_JS_STRING = {
    "\\": r"\\",
    "\t": r"\t",
    "\x08": r"\b",
    }

# We do not escape "\x08" to "\\b" since that means word-break in RegExps.
_SHORT_ESCAPES_FOR_JS_REGEX = {
    "\\": r"\\",
    "\t": r"\t",
    }


def _js_escape(char, short_escapes):
    """Backslash escapes a character for a JS string or regex literal."""
    encoded = short_escapes.get(char)
    if encoded is None:
        encoded = r'\u%04x' % ord(char)
    return encoded


def _css_escape(char):
    """
    '\\n' -> '\\a '.
    The trailing space ends the hex escape so a following hex digit in the
    input is not read as part of it.
    """
    return '\\%x ' % ord(char)


_ESCAPE_MAP_FOR_HTML = _escape_map(
    SENSITIVE_FOR_HTML, _numeric_character_reference)

_ESCAPE_MAP_FOR_JS_STRING = _escape_map(
    SENSITIVE_FOR_JS_STRING,
    functools.partial(_js_escape, short_escapes=_SHORT_ESCAPES_FOR_JS_STRING))

_ESCAPE_MAP_FOR_JS_REGEX = _escape_map(
    SENSITIVE_FOR_JS_REGEX,
    functools.partial(_js_escape, short_escapes=_SHORT_ESCAPES_FOR_JS_REGEX))

_ESCAPE_MAP_FOR_CSS_STRING = _escape_map(SENSITIVE_FOR_CSS_STRING, _css_escape)


def _replacer_for_html(match):
    """A regex replacer."""
    return _ESCAPE_MAP_FOR_HTML[match.group(0)]


def _replacer_for_js_string(match):
    """A regex replacer."""
    return _ESCAPE_MAP_FOR_JS_STRING[match.group(0)]


def _replacer_for_js_regex(match):
    """A regex replacer."""
    return _ESCAPE_MAP_FOR_JS_REGEX[match.group(0)]


def _replacer_for_css(match):
    """A regexp replacer."""
    return _ESCAPE_MAP_FOR_CSS_STRING[match.group(0)]


def _pct_encode(match):
    """URL encodes the UTF-8 octets of the matched run."""
    octets = match.group(0).encode('UTF-8', 'surrogatepass')
    return ''.join(['%%%02X' % octet for octet in octets])


_MATCHER_FOR_ESCAPE_HTML = _char_class(SENSITIVE_FOR_HTML)

_MATCHER_FOR_ESCAPE_HTML_TEXT = _char_class(SENSITIVE_FOR_HTML_TEXT)

_MATCHER_FOR_ESCAPE_JS_STRING = _char_class(SENSITIVE_FOR_JS_STRING)

_MATCHER_FOR_ESCAPE_JS_REGEX = _char_class(SENSITIVE_FOR_JS_REGEX)

_MATCHER_FOR_ESCAPE_CSS_STRING = _char_class(SENSITIVE_FOR_CSS_STRING)

_NOT_URI_SAFE = re.compile('[^%s]+' % _class_body(URI_SAFE))

_NOT_URI_COMPONENT_SAFE = re.compile(
    '[^%s]+' % _class_body(URI_COMPONENT_SAFE))


def _null_safe(escaper):
    """
    Makes escaper total: None escapes to the empty string, bytes are decoded
    as UTF-8 with malformed sequences replaced by U+FFFD, and other values
    that are not strings are coerced to strings before escaping.
    """
    @functools.wraps(escaper)
    def escape_value(value, *args, **kwargs):
        if value is None:
            return ""
        if isinstance(value, bytes):
            value = value.decode('UTF-8', 'replace')
        elif not isinstance(value, str):
            value = str(value)
        return escaper(value, *args, **kwargs)
    return escape_value


@_null_safe
def escape_html(value):
    """
    Escapes HTML special characters, quotes, whitespace and '/' in a string
    using decimal numeric character references, so the result can appear as
    text, as a quoted or unquoted attribute value, or inside a tag or
    attribute name.

    value - The string-like value to be escaped.  May not be a string,
            but the value will be coerced to a string.

    Returns an escaped version of value.
    """
    return _MATCHER_FOR_ESCAPE_HTML.sub(_replacer_for_html, value)


@_null_safe
def escape_html_text(value):
    """
    Escapes '<', '>', '&' and quotes in a string.  Only safe for text and
    for attribute values that are always quoted; use escape_html when the
    value might end up in an unquoted attribute.

    value - The string-like value to be escaped.  May not be a string,
            but the value will be coerced to a string.

    Returns an escaped version of value.
    """
    return _MATCHER_FOR_ESCAPE_HTML_TEXT.sub(_replacer_for_html, value)


@_null_safe
def escape_js_string(value):
    """
    Escapes characters in the value to make it valid content for a quoted
    JS string literal in an inline script.

    value - The value to escape.  May not be a string, but the value
        will be coerced to a string.

    Returns an escaped version of value.
    """
    return _MATCHER_FOR_ESCAPE_JS_STRING.sub(_replacer_for_js_string, value)


@_null_safe
def escape_js_regex(value):
    """
    Escapes characters in the string to make it valid content for a JS regular
    expression literal that matches value literally.

    value - The value to escape.  May not be a string, but the value
        will be coerced to a string.

    Returns an escaped version of value.
    """
    return _MATCHER_FOR_ESCAPE_JS_REGEX.sub(_replacer_for_js_regex, value)


@_null_safe
def escape_css_string(value):
    """
    Escapes a string so it can safely be included inside a quoted CSS string.

    value - The value to escape.  May not be a string, but the value
        will be coerced to a string.

    Returns an escaped version of value.
    """
    return _MATCHER_FOR_ESCAPE_CSS_STRING.sub(_replacer_for_css, value)


@_null_safe
def escape_uri(value):
    """
    Percent encodes a string so it can be used as a URI or path.  Only
    unreserved characters and '/' are left as is.

    value - The value to escape.  May not be a string, but the value
        will be coerced to a string.

    Returns an escaped version of value.
    """
    return _NOT_URI_SAFE.sub(_pct_encode, value)


@_null_safe
def escape_uri_component(value):
    """
    Percent encodes a string so it can be used as a single path segment,
    query parameter name or value, or fragment.

    value - The value to escape.  May not be a string, but the value
        will be coerced to a string.

    Returns an escaped version of value.
    """
    return _NOT_URI_COMPONENT_SAFE.sub(_pct_encode, value)


@_null_safe
def escape_sql_like_clause(value, escape_char=DEFAULT_SQL_LIKE_ESCAPE_CHAR):
    """
    Escapes the wildcards of a SQL LIKE pattern so value matches literally.
    The query must declare the same character in its ESCAPE clause:

        ... WHERE name LIKE '%' || ? || '%' ESCAPE '@'

    value - The value to escape.  May not be a string, but the value
        will be coerced to a string.
    escape_char - The single character used to escape '%', '_' and
        itself.

    Returns an escaped version of value.
    """
    if type(escape_char) is not str or len(escape_char) != 1:
        raise ValueError(
            'escape_char must be a single character, not %r' % (escape_char,))
    return _char_class('%_' + escape_char).sub(
        lambda match: escape_char + match.group(0), value)


SANITIZER_FOR_ESC_MODE = [None for _ in range(0, COUNT_OF_ESC_MODES)]
SANITIZER_FOR_ESC_MODE[ESC_MODE_HTML] = escape_html
SANITIZER_FOR_ESC_MODE[ESC_MODE_HTML_TEXT] = escape_html_text
SANITIZER_FOR_ESC_MODE[ESC_MODE_JS_STRING] = escape_js_string
SANITIZER_FOR_ESC_MODE[ESC_MODE_JS_REGEX] = escape_js_regex
SANITIZER_FOR_ESC_MODE[ESC_MODE_CSS_STRING] = escape_css_string
SANITIZER_FOR_ESC_MODE[ESC_MODE_URI] = escape_uri
SANITIZER_FOR_ESC_MODE[ESC_MODE_URI_COMPONENT] = escape_uri_component
SANITIZER_FOR_ESC_MODE[ESC_MODE_SQL_LIKE_CLAUSE] = escape_sql_like_clause
SANITIZER_FOR_ESC_MODE = tuple(SANITIZER_FOR_ESC_MODE)
