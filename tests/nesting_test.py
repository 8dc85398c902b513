#!/usr/bin/env python

"""Testcases for modules nesting and debug"""

import unittest

from ctxesc import debug, escaping, nesting
from ctxesc.escaping import (
    ESC_MODE_CSS_STRING, ESC_MODE_HTML, ESC_MODE_HTML_TEXT, ESC_MODE_JS_STRING,
    ESC_MODE_SQL_LIKE_CLAUSE, ESC_MODE_URI, ESC_MODE_URI_COMPONENT)
import test_common


class NestingTest(unittest.TestCase):
    """Testcases for module nesting"""

    def assert_no_bad_sequences(self, escaped, bad_sequences):
        """Fails if any of bad_sequences appears in escaped."""
        for bad_sequence in bad_sequences:
            self.assertNotIn(
                bad_sequence, escaped,
                '%r found in %r' % (bad_sequence, escaped))

    def test_uri_in_html(self):
        """
        A URL in an HTML attribute.
        <a href="TAINTED">
        """
        before = ("javascript:alert(1); escape parent context \" "
                  " break context % escape HTML context </a>"
                  " data:text/html,<script>alert(1)</script>")
        after = escaping.escape_html(escaping.escape_uri(before))
        self.assert_no_bad_sequences(
            after, ("javascript:", "data:", "(1);", "\"", " % ", "</a>"))
        self.assertEqual(
            after, nesting.escape_nested(before, ESC_MODE_URI, ESC_MODE_HTML))

    def test_uri_in_css_in_html(self):
        """
        A URL in a CSS string in an HTML style attribute.
        <span style="background-image:url('TAINTED')">
        """
        before = ("javascript:alert(1) break child context % close parent"
                  " context ') escape parent context \" escape parent context"
                  " </span>")
        after = escaping.escape_html(
            escaping.escape_css_string(escaping.escape_uri(before)))
        self.assert_no_bad_sequences(
            after,
            ("javascript:", "javascript&#3A;", " % ", " &#25; ", "')", "\n",
             "\"", "</span>"))
        self.assertEqual(
            after,
            nesting.escape_nested(
                before, ESC_MODE_URI, ESC_MODE_CSS_STRING, ESC_MODE_HTML))

    def test_js_string_in_html(self):
        """
        A JS string in an event handler attribute.
        <button onclick="alert('TAINTED')">
        """
        before = "');alert(1)//\"><script>"
        after = nesting.escape_nested(
            before, ESC_MODE_JS_STRING, ESC_MODE_HTML)
        self.assert_no_bad_sequences(after, ("'", "\"", "<", ">", "//"))
        self.assertEqual(
            escaping.escape_html(escaping.escape_js_string(before)), after)

    def test_single_mode(self):
        """One mode is the same as calling its sanitizer."""
        for esc_mode in range(escaping.COUNT_OF_ESC_MODES):
            sanitizer = escaping.SANITIZER_FOR_ESC_MODE[esc_mode]
            self.assertEqual(
                sanitizer(test_common.ASCII_AND_SELECTED_CODEPOINTS),
                nesting.escape_nested(
                    test_common.ASCII_AND_SELECTED_CODEPOINTS, esc_mode))

    def test_redundant_modes_skipped(self):
        """Skipping a redundant outer mode does not change the output."""
        test_input = test_common.ASCII_AND_SELECTED_CODEPOINTS
        for inner, outer in escaping.REDUNDANT_ESC_MODES:
            want = escaping.SANITIZER_FOR_ESC_MODE[outer](
                escaping.SANITIZER_FOR_ESC_MODE[inner](test_input))
            self.assertEqual(
                want, nesting.escape_nested(test_input, inner, outer))

    def test_sql_like_innermost(self):
        """A LIKE pattern may be embedded in other contexts."""
        self.assertEqual(
            "50%40%25%20off",
            nesting.escape_nested(
                "50% off", ESC_MODE_SQL_LIKE_CLAUSE, ESC_MODE_URI_COMPONENT,
                ESC_MODE_HTML))
        self.assertEqual(
            "a@_b&#39;",
            nesting.escape_nested(
                "a_b'", ESC_MODE_SQL_LIKE_CLAUSE, ESC_MODE_HTML_TEXT))

    def test_null_input(self):
        """None escapes to the empty string."""
        self.assertEqual(
            "",
            nesting.escape_nested(None, ESC_MODE_URI, ESC_MODE_CSS_STRING))

    def test_bad_pipelines(self):
        """Chains that cannot be right are rejected."""
        tests = (
            ((), 'no escaping modes given'),
            ((ESC_MODE_URI, 42),
             'unknown escaping mode 42 in'
             ' [Pipeline ESC_MODE_URI | UNKNOWN(42)]'),
            ((ESC_MODE_URI, 'html'),
             "unknown escaping mode 'html' in"
             " [Pipeline ESC_MODE_URI | UNKNOWN('html')]"),
            ((ESC_MODE_URI, ESC_MODE_URI, ESC_MODE_HTML),
             'ESC_MODE_URI applied twice in'
             ' [Pipeline ESC_MODE_URI | ESC_MODE_URI | ESC_MODE_HTML]'),
            ((ESC_MODE_HTML, ESC_MODE_SQL_LIKE_CLAUSE),
             'ESC_MODE_SQL_LIKE_CLAUSE must be innermost in'
             ' [Pipeline ESC_MODE_HTML | ESC_MODE_SQL_LIKE_CLAUSE]'),
            )
        for esc_modes, want in tests:
            try:
                nesting.escape_nested("x", *esc_modes)
            except nesting.EscapeError as err:
                self.assertEqual(want, str(err))
            else:
                self.fail('%r did not raise' % (esc_modes,))

    def test_bad_pipeline_with_null_input(self):
        """Mistakes are reported even when there is nothing to escape."""
        self.assertRaises(
            nesting.EscapeError,
            nesting.escape_nested, None, ESC_MODE_HTML, ESC_MODE_HTML)


class DebugTest(unittest.TestCase):
    """Testcases for module debug"""

    def test_esc_mode_to_string(self):
        """Escaping modes are named after their constants."""
        self.assertEqual('ESC_MODE_HTML', debug.esc_mode_to_string(
            ESC_MODE_HTML))
        self.assertEqual('ESC_MODE_URI_COMPONENT', debug.esc_mode_to_string(
            ESC_MODE_URI_COMPONENT))
        self.assertEqual('UNKNOWN(-1)', debug.esc_mode_to_string(-1))
        for esc_mode in range(escaping.COUNT_OF_ESC_MODES):
            self.assertTrue(
                debug.esc_mode_to_string(esc_mode).startswith('ESC_MODE_'))

    def test_esc_modes_to_string(self):
        """Pipelines list their modes in the order they are applied."""
        self.assertEqual(
            '[Pipeline ESC_MODE_URI | ESC_MODE_CSS_STRING | ESC_MODE_HTML]',
            debug.esc_modes_to_string(
                (ESC_MODE_URI, ESC_MODE_CSS_STRING, ESC_MODE_HTML)))


if __name__ == '__main__':
    unittest.main()
