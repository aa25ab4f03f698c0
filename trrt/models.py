"""
Term Reference Models
Runtime data types passed between matcher, renderer and engine.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Optional


@dataclass
class TermReference:
    """A parsed term reference."""
    showtext: str
    term: str
    trait: Optional[str] = None
    scopetag: Optional[str] = None
    vsntag: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


@dataclass
class TermMatch:
    """A term reference found in text."""
    start: int
    end: int
    text: str
    reference: TermReference

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class TextEdit:
    """Replace text[start:end] with `replacement`."""
    start: int
    end: int
    replacement: str

    @property
    def delta(self) -> int:
        """Length change caused by this edit."""
        return len(self.replacement) - (self.end - self.start)
