"""Jinja2 rendering of generated source files.

Templates live in ``nextmfe/scaffold/templates`` and are rendered with
``StrictUndefined`` so a missing variable fails loudly instead of leaving
a hole in generated code.  Names reaching the templates have already been
validated against ``NAME_PATTERN``; the filters below only deal with the
remaining JavaScript syntax concerns (object keys, string literals).
"""

from __future__ import annotations

import json
import re
from functools import lru_cache

import jinja2

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def js_key(name: str) -> str:
    """Render ``name`` as an object key, quoting it when it is not an identifier."""
    if _JS_IDENTIFIER.match(name):
        return name
    return js_string(name)


def js_string(value: str) -> str:
    """Render a single-quoted JavaScript string literal."""
    escaped = json.dumps(value)[1:-1].replace("'", "\\'").replace('\\"', '"')
    return f"'{escaped}'"


@lru_cache(maxsize=1)
def get_environment() -> jinja2.Environment:
    env = jinja2.Environment(  # noqa: S701 -- output is source code, not HTML
        loader=jinja2.PackageLoader("nextmfe.scaffold", "templates"),
        undefined=jinja2.StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["js_key"] = js_key
    env.filters["js_string"] = js_string
    return env


def render(template_name: str, **context: object) -> str:
    """Render a packaged template by name (e.g. ``"host/page.tsx.j2"``)."""
    return get_environment().get_template(template_name).render(**context)
