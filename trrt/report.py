"""
Resolution Report

Collects conversions and diagnostics for a single run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

LOCATOR_WIDTH = 50
KIND_WIDTH = 12


class DiagnosticKind(Enum):
    """Kinds of reported problems"""
    UNRESOLVED = "unresolved"
    EMPTY_RENDER = "empty-render"
    INVALID_ENTRY = "invalid-entry"
    FILE_ERROR = "file-error"


@dataclass
class Diagnostic:
    """A single reported problem"""
    kind: DiagnosticKind
    message: str
    file: Optional[str] = None
    line: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "file": self.file,
            "line": self.line,
            "message": self.message,
        }


def format_message(label: str, file: Optional[str], line: Optional[int], message: str) -> str:
    """Format a report line: fixed width label and locator, then the message."""
    locator = file or ""
    if line is not None:
        locator = f"{locator}:{line}"
    if len(locator) > LOCATOR_WIDTH:
        locator = f"...{locator[-(LOCATOR_WIDTH - 3):]}"
    else:
        locator = locator.ljust(LOCATOR_WIDTH)
    return f"{label.ljust(KIND_WIDTH)} {locator} {message}"


@dataclass
class ResolutionReport:
    """
    Append-only record of a resolution run.

    Every diagnostic is logged when it is recorded; `summary()` renders
    the end-of-run report.
    """
    converted: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)

    @property
    def converted_count(self) -> int:
        return len(self.converted)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def term_converted(self, term: str):
        self.converted.append(term)

    def term_help(
        self,
        file: str,
        line: int,
        message: str,
        kind: DiagnosticKind = DiagnosticKind.UNRESOLVED,
    ) -> Diagnostic:
        """Record a problem with a single term reference"""
        diagnostic = Diagnostic(kind=kind, message=message, file=file, line=line)
        self.diagnostics.append(diagnostic)
        logger.warning(f"{file}:{line} {message}")
        return diagnostic

    def entry_dropped(self, file: str, message: str) -> Diagnostic:
        """Record a glossary entry that was left out of the runtime glossary"""
        diagnostic = Diagnostic(kind=DiagnosticKind.INVALID_ENTRY, message=message, file=file)
        self.diagnostics.append(diagnostic)
        logger.warning(f"{file}: {message}")
        return diagnostic

    def error(self, message: str, file: Optional[str] = None) -> Diagnostic:
        """Record a file level failure"""
        diagnostic = Diagnostic(kind=DiagnosticKind.FILE_ERROR, message=message, file=file)
        self.errors.append(diagnostic)
        logger.error(f"{file}: {message}" if file else message)
        return diagnostic

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics + self.errors if d.kind == kind]

    def summary(self) -> str:
        lines = [
            "Resolution Report:",
            f"       Number of terms converted: {self.converted_count}",
        ]
        if self.diagnostics:
            lines.append("   Warnings:")
            for d in self.diagnostics:
                label = "MRG ENTRY" if d.kind == DiagnosticKind.INVALID_ENTRY else "TERM HELP"
                lines.append(format_message(label, d.file, d.line, d.message))
        if self.errors:
            lines.append("   Errors:")
            for d in self.errors:
                lines.append(format_message("ERROR", d.file, d.line, d.message))
        return "\n".join(lines)
