"""
Term Pattern Matcher
Engine for finding term references in text.
"""
import re
import logging
from typing import Dict, List, Optional, Pattern

from .exceptions import GrammarError
from .models import TermMatch, TermReference

logger = logging.getLogger(__name__)


# [showtext](id#trait@scopetag:vsntag)
STANDARD_PATTERN = (
    r"\[(?=[^@\]]+\]\([#a-z0-9_-]*@[:a-z0-9._-]*\))"
    r"(?P<showtext>[^\n\]@]+)\]\("
    r"(?:(?P<id>[a-z0-9_-]*)?(?:#(?P<trait>[a-z0-9_-]+))?)?"
    r"@(?P<scopetag>[a-z0-9_-]*)(?::(?P<vsntag>[a-z0-9._-]+))?\)"
)

# [showtext@scopetag:vsntag](id#trait)
ALT_PATTERN = (
    r"\[(?=[^@\]]+@[:a-z0-9._-]*\](?:\([#a-z0-9_-]+\))?)"
    r"(?P<showtext>[^\n\]@]+?)@(?P<scopetag>[a-z0-9_-]*)(?::(?P<vsntag>[a-z0-9._-]+?))?\]"
    r"(?:\((?P<id>[a-z0-9_-]*)(?:#(?P<trait>[a-z0-9_-]+?))?\))?"
)

GRAMMARS: Dict[str, str] = {
    "default": STANDARD_PATTERN,
    "standard": STANDARD_PATTERN,
    "alt": ALT_PATTERN,
    "alternate": ALT_PATTERN,
}

# A reference directly preceded by one of these is escaped
ESCAPE_CHARS = "\\`"

_JS_LITERAL = re.compile(r"^/(?P<body>.*)/(?P<flags>[a-z]*)$", re.DOTALL)
_JS_NAMED_GROUP = re.compile(r"\(\?<(?![=!])")
_JS_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    # matching is always global and non-anchored
    "g": 0,
    "y": 0,
    "u": 0,
    "d": 0,
}

_APOSTROPHES_PARENS = re.compile(r"['’()]")
_NON_SLUG = re.compile(r"[^a-z0-9_-]+")


def derive_term(showtext: str) -> str:
    """
    Derive a term id from the text shown for a reference.

    "Driver's License (EU)" -> "drivers-license-eu"
    """
    slug = _APOSTROPHES_PARENS.sub("", showtext.lower())
    slug = _NON_SLUG.sub("-", slug)
    return slug.strip("-")


def compile_custom_pattern(source: str) -> Pattern:
    """
    Compile a user supplied reference pattern.

    Accepts plain `re` syntax or a `/body/flags` literal; JavaScript style
    named groups `(?<name>...)` are rewritten to `(?P<name>...)`.
    """
    flags = 0
    body = source
    literal = _JS_LITERAL.match(source)
    if literal:
        body = literal.group("body")
        for flag in literal.group("flags"):
            if flag not in _JS_FLAGS:
                raise GrammarError(f"Unsupported pattern flag '{flag}' in {source}")
            flags |= _JS_FLAGS[flag]
    body = _JS_NAMED_GROUP.sub("(?P<", body)

    try:
        return re.compile(body, flags)
    except re.error as e:
        raise GrammarError(f"Invalid term reference pattern {source!r}: {e}") from e


class TermPatternMatcher:
    """
    Engine for finding term references in source text.

    Features:
    - Standard and alternate reference grammars, or a custom pattern
    - Escaping with a leading backslash or backtick
    - Ordered, non-overlapping matches
    """

    def __init__(self, grammar: str = "default"):
        """
        Initialize matcher.

        Args:
            grammar: Grammar name (default, alt) or a custom pattern
        """
        key = str(grammar).lower()
        if key in GRAMMARS:
            self._grammar = "alt" if GRAMMARS[key] is ALT_PATTERN else "default"
            self.pattern = re.compile(GRAMMARS[key])
        else:
            self._grammar = "custom"
            self.pattern = compile_custom_pattern(str(grammar))

    @property
    def grammar(self) -> str:
        return self._grammar

    def find_matches(self, text: str) -> List[TermMatch]:
        """
        Find all term references in the text.

        Returns:
            List of TermMatch objects sorted by position
        """
        matches: List[TermMatch] = []
        if not text:
            return matches

        pos = 0
        while pos <= len(text):
            found = self.pattern.search(text, pos)
            if found is None:
                break

            start, end = found.span()
            if end == start:
                pos = start + 1
                continue

            if start > 0 and text[start - 1] in ESCAPE_CHARS:
                logger.debug(f"Skipping escaped term ref at {start}: {found.group(0)}")
                pos = start + 1
                continue

            matches.append(TermMatch(
                start=start,
                end=end,
                text=found.group(0),
                reference=self.interpret(found),
            ))
            pos = end

        logger.debug(f"Found {len(matches)} term refs in text")
        return matches

    def interpret(self, found: "re.Match") -> TermReference:
        """Build a TermReference from the named groups of a match."""
        groups = found.groupdict()

        def group(name: str) -> Optional[str]:
            return groups.get(name) or None

        showtext = group("showtext") or ""
        reference = TermReference(
            showtext=showtext,
            term=group("id") or derive_term(showtext),
            trait=group("trait"),
            scopetag=group("scopetag"),
            vsntag=group("vsntag"),
        )
        logger.debug(f"Interpreted term ref: {reference.term} {reference.scopetag}")
        return reference
