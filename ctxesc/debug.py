"""
Utility functions that aid in debugging escaper composition problems.
"""

from ctxesc import escaping


def _escaping_enum_name_table(prefix):
    """
    Given 'FOO_' produces a table mapping
    the value of escaping.FOO_XYZ to 'FOO_XYZ'.
    """
    name_table = {}
    for key, value in vars(escaping).items():
        if (key.startswith(prefix)
            and type(value) is int
            and value not in name_table):
            name_table[value] = key
    return name_table

_ESC_MODE_NAMES = _escaping_enum_name_table('ESC_MODE_')


def esc_mode_to_string(esc_mode):
    """
    Converts an escaping mode represented as an integer to a diagnostic
    string like 'ESC_MODE_HTML'.
    """
    return _ESC_MODE_NAMES.get(esc_mode) or 'UNKNOWN(%r)' % (esc_mode,)


def esc_modes_to_string(esc_modes):
    """
    Describes a series of escaping modes in the order they are applied.
    """
    return "[Pipeline %s]" % " | ".join(
        [esc_mode_to_string(esc_mode) for esc_mode in esc_modes])
