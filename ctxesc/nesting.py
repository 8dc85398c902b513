"""
Applies a chain of escapers to a value that crosses several context
boundaries, e.g. a URL inside a CSS string inside an HTML attribute:

    <span style="background:url('{{value}}')">

    escape_nested(value, ESC_MODE_URI, ESC_MODE_CSS_STRING, ESC_MODE_HTML)

Escaping modes are listed innermost context first, outermost last, which is
the order in which they are applied.
"""

from ctxesc import debug, escaping


def escape_nested(value, *esc_modes):
    """
    Escapes value for each of the given contexts in turn.

    value - The value to escape.  None escapes to the empty string.
    esc_modes - ESC_MODE_* values, innermost context first.

    Returns the escaped value.  Raises EscapeError if esc_modes describe a
    chain that cannot be right: an unknown mode, the same mode twice in a
    row (double encoding), or a SQL LIKE clause that is not innermost.
    """
    esc_modes = _check_pipeline(esc_modes)
    if value is None:
        return ""
    last = None
    for esc_mode in esc_modes:
        # If, for all x, g(f(x)) == f(x), we can skip g.
        if (last, esc_mode) in escaping.REDUNDANT_ESC_MODES:
            continue
        value = escaping.SANITIZER_FOR_ESC_MODE[esc_mode](value)
        last = esc_mode
    return value


def _check_pipeline(esc_modes):
    """
    Rejects escaping mode sequences that are certainly wrong.
    Returns esc_modes as a tuple.
    """
    esc_modes = tuple(esc_modes)
    if not esc_modes:
        raise EscapeError('no escaping modes given')
    for pos, esc_mode in enumerate(esc_modes):
        if (type(esc_mode) is not int
            or not 0 <= esc_mode < escaping.COUNT_OF_ESC_MODES):
            raise EscapeError('unknown escaping mode %r in %s' % (
                esc_mode, debug.esc_modes_to_string(esc_modes)))
        if pos and esc_mode == esc_modes[pos - 1]:
            raise EscapeError('%s applied twice in %s' % (
                debug.esc_mode_to_string(esc_mode),
                debug.esc_modes_to_string(esc_modes)))
        if pos and esc_mode == escaping.ESC_MODE_SQL_LIKE_CLAUSE:
            raise EscapeError('%s must be innermost in %s' % (
                debug.esc_mode_to_string(esc_mode),
                debug.esc_modes_to_string(esc_modes)))
    return esc_modes


class EscapeError(Exception):
    """
    A sequence of escaping modes that cannot safely be composed.
    """

    def __init__(self, msg):
        Exception.__init__(self, msg)
