"""Pattern arguments for the replace and match transformations.

A pattern argument written as a regex literal ("/a+/g") is compiled into
a regular expression with the given flags. Any other text is matched as a
literal substring.

Supported flags: g (every match instead of the first), i (ignore case),
m (multiline anchors), y (sticky: matches must start where the previous
one ended, the first one at position 0).
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

_REGEX_LITERAL = re.compile(r"/(.*)/([gimy]{0,4})", re.DOTALL)
_REPLACEMENT_TOKEN = re.compile(r"\$(\$|&|\d{1,2})")

_FLAG_MAP = {"i": re.IGNORECASE, "m": re.MULTILINE}


@dataclass(frozen=True)
class Pattern:
    """A compiled pattern argument plus the flags re has no equivalent for."""

    regex: re.Pattern
    global_: bool = False
    sticky: bool = False

    def iter_matches(self, text: str) -> Iterator[re.Match]:
        """Matches in order, stopping after the first unless global."""
        pos = 0
        while pos <= len(text):
            if self.sticky:
                match = self.regex.match(text, pos)
            else:
                match = self.regex.search(text, pos)
            if match is None:
                return
            yield match
            if not self.global_:
                return
            # Step past empty matches so the scan always advances
            pos = match.end() if match.end() > match.start() else match.end() + 1

    def replace(self, text: str, replacement: str) -> str:
        parts = []
        last = 0
        for match in self.iter_matches(text):
            parts.append(text[last:match.start()])
            parts.append(expand_replacement(match, replacement))
            last = match.end()
        parts.append(text[last:])
        return "".join(parts)

    def match(self, text: str) -> Optional[list]:
        """Whole match plus groups, or every whole match when global."""
        matches = list(self.iter_matches(text))
        if not matches:
            return None
        if self.global_:
            return [m.group(0) for m in matches]
        first = matches[0]
        return [first.group(0), *first.groups()]


def is_regex_literal(text: str) -> bool:
    return _REGEX_LITERAL.fullmatch(text) is not None


def compile_pattern(pattern: str) -> Pattern:
    """Compile a pattern argument.

    Raises:
        re.error: If a regex literal's body is not a valid expression
    """
    literal = _REGEX_LITERAL.fullmatch(pattern)
    if literal is None:
        return Pattern(regex=re.compile(re.escape(pattern)))

    body, flags = literal.groups()
    re_flags = 0
    for flag in flags:
        re_flags |= _FLAG_MAP.get(flag, 0)
    return Pattern(
        regex=re.compile(body, re_flags),
        global_="g" in flags,
        sticky="y" in flags,
    )


def expand_replacement(match: re.Match, replacement: str) -> str:
    """Substitute $&, $1..$99 and $$ in replacement text.

    A two-digit reference that names no group falls back to a one-digit
    reference followed by the literal second digit. References to
    groups that did not participate expand to "".
    """
    group_count = len(match.groups())

    def _token(token: re.Match) -> str:
        ref = token.group(1)
        if ref == "$":
            return "$"
        if ref == "&":
            return match.group(0)
        if 0 < int(ref) <= group_count:
            return match.group(int(ref)) or ""
        if len(ref) == 2 and 0 < int(ref[0]) <= group_count:
            return (match.group(int(ref[0])) or "") + ref[1]
        return token.group(0)

    return _REPLACEMENT_TOKEN.sub(_token, replacement)
