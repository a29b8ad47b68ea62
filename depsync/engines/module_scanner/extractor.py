"""Pull ``require()`` arguments out of JavaScript source text."""

from __future__ import annotations

import re
from collections.abc import Iterator

# require( <ws> <quote> literal <quote> <ws> )
# The literal may not contain its own quote, a backslash or a newline, and a
# backtick literal may not interpolate. Anything else (variables,
# concatenation, template expressions) is not matched and therefore skipped.
REQUIRE_CALL_RE = re.compile(
    r"(?<![\w$])require\(\s*"
    r"(?:'(?P<single>[^'\\\n]*)'"
    r'|"(?P<double>[^"\\\n]*)"'
    r"|`(?P<backtick>(?:(?!\$\{)[^`\\\n])*)`)"
    r"\s*\)"
)


def iter_references(text: str) -> Iterator[str]:
    """Yield the literal argument of every ``require("...")`` call in *text*.

    Only a single quoted literal is understood. ``require(name)`` or
    ``require("a" + b)`` yield nothing for that call. Comments are not
    stripped, so a commented-out require is still reported.
    """
    for match in REQUIRE_CALL_RE.finditer(text):
        literal = match.group("single")
        if literal is None:
            literal = match.group("double")
        if literal is None:
            literal = match.group("backtick")
        yield literal.strip()
