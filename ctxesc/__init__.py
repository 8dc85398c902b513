"""
Contextual output escaping for untrusted strings.

Pick the escaper for the context a value is embedded in.  When contexts nest,
apply the innermost context's escaper first:

    from ctxesc import escape_css_string, escape_html, escape_uri

    style = "background:url('%s')" % escape_css_string(escape_uri(value))
    html = '<span style="%s">' % escape_html(style)
"""

from ctxesc.escaping import (
    DEFAULT_SQL_LIKE_ESCAPE_CHAR,
    ESC_MODE_CSS_STRING,
    ESC_MODE_HTML,
    ESC_MODE_HTML_TEXT,
    ESC_MODE_JS_REGEX,
    ESC_MODE_JS_STRING,
    ESC_MODE_SQL_LIKE_CLAUSE,
    ESC_MODE_URI,
    ESC_MODE_URI_COMPONENT,
    escape_css_string,
    escape_html,
    escape_html_text,
    escape_js_regex,
    escape_js_string,
    escape_sql_like_clause,
    escape_uri,
    escape_uri_component,
    )
from ctxesc.filters import (
    as_css_color,
    as_flexible_url,
    as_number,
    as_url,
    )
from ctxesc.nesting import EscapeError, escape_nested

__version__ = '1.0.0'
