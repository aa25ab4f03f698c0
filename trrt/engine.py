"""
Resolution Engine

Main orchestrator: builds the glossary, then scans, resolves and rewrites
every input file.
"""

import glob
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .exceptions import TermResolverError
from .glossary import GlossaryIndex
from .matcher import TermPatternMatcher
from .models import TextEdit
from .renderer import TemplateRenderer
from .report import DiagnosticKind, ResolutionReport


class EngineState(Enum):
    """Lifecycle of a resolution run"""
    IDLE = "idle"
    INITIALIZING = "initializing"
    SCANNING = "scanning"
    DONE = "done"
    FAILED = "failed"


def apply_edits(text: str, edits: Iterable[TextEdit]) -> Tuple[str, List[int]]:
    """
    Apply non-overlapping edits in a single forward pass.

    Untouched spans are copied between replacements, so the k-th edit
    lands at its original start plus the summed deltas of the edits
    before it.

    Returns:
        (new text, insertion offset of each edit in start order)
    """
    parts: List[str] = []
    offsets: List[int] = []
    cursor = 0
    written = 0

    for edit in sorted(edits, key=lambda e: e.start):
        if edit.start < cursor:
            raise ValueError(f"Edit at {edit.start} overlaps the previous edit ending at {cursor}")
        if edit.end < edit.start or edit.end > len(text):
            raise ValueError(f"Edit span {edit.start}:{edit.end} is outside the text")

        untouched = text[cursor:edit.start]
        parts.append(untouched)
        written += len(untouched)
        offsets.append(written)

        parts.append(edit.replacement)
        written += len(edit.replacement)
        cursor = edit.end

    parts.append(text[cursor:])
    return "".join(parts), offsets


def line_number(text: str, offset: int) -> int:
    """1-based line of `offset` in `text`."""
    return text.count("\n", 0, offset) + 1


class ResolutionEngine:
    """
    Resolve term references in a set of files.

    All collaborators are passed in, so each can be replaced in tests.

    Usage:
        report = ResolutionReport()
        engine = ResolutionEngine(
            glossary=GlossaryIndex("scope", report=report),
            matcher=TermPatternMatcher("default"),
            renderer=TemplateRenderer("http"),
            output_dir="out",
            glob_pattern="docs/**/*.md",
            report=report,
        )
        engine.resolve()
    """

    def __init__(
        self,
        glossary: GlossaryIndex,
        matcher: TermPatternMatcher,
        renderer: TemplateRenderer,
        output_dir: Union[str, Path],
        vsntag: str = "latest",
        glob_pattern: str = "*",
        input_root: Optional[Union[str, Path]] = None,
        report: Optional[ResolutionReport] = None,
    ):
        self.glossary = glossary
        self.matcher = matcher
        self.renderer = renderer
        self.output_dir = Path(output_dir)
        self.vsntag = vsntag
        self.glob_pattern = glob_pattern
        self.input_root = Path(input_root) if input_root is not None else Path.cwd()
        self.report = report if report is not None else glossary.report
        self.state = EngineState.IDLE
        self.logger = logging.getLogger(__name__)

    def resolve(self) -> bool:
        """
        Run the whole resolution.

        Initialization errors are fatal and propagate; per-file and
        per-reference problems are recorded in the report.
        """
        self.state = EngineState.INITIALIZING
        try:
            self.glossary.initialize()
        except TermResolverError:
            self.state = EngineState.FAILED
            raise

        self.logger.info(
            f"Using interpreter '{self.matcher.grammar}' "
            f"and converter '{self.renderer.template_type}'"
        )
        self.logger.info(f"Reading files using pattern string '{self.glob_pattern}'")

        self.state = EngineState.SCANNING
        files = self.list_files()
        written = 0
        for path in files:
            if self.process_file(path) is not None:
                written += 1

        self.state = EngineState.DONE
        self.logger.info(f"Resolution complete: wrote {written} of {len(files)} file(s)")
        return True

    def list_files(self) -> List[Path]:
        return [
            Path(p) for p in glob.glob(self.glob_pattern, recursive=True)
            if os.path.isfile(p)
        ]

    def process_file(self, path: Union[str, Path]) -> Optional[Path]:
        """
        Resolve one file.

        Returns:
            The written output path, or None when nothing was written
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            self.report.error(f"Error reading file: {e}", file=str(path))
            return None

        result = self._convert(str(path), text)
        if result is None:
            return None
        converted, terms = result

        target = self.output_path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(converted)
        except OSError as e:
            self.report.error(f"Error writing file {target}: {e}", file=str(path))
            return None

        # only conversions that reached the output are counted
        for term in terms:
            self.report.term_converted(term)
        self.logger.debug(f"Writing: {target}")
        return target

    def output_path(self, path: Union[str, Path]) -> Path:
        """Mirror `path`, relative to the input root, under the output directory."""
        absolute = Path(os.path.abspath(path))
        try:
            relative = absolute.relative_to(os.path.abspath(self.input_root))
        except ValueError:
            relative = Path(*absolute.parts[1:])
        return self.output_dir / relative

    def interpret_and_convert(self, file: str, text: str) -> Optional[str]:
        """
        Resolve and render every term reference in `text`.

        Returns:
            The rewritten text, or None when the text holds no references
        """
        result = self._convert(file, text)
        if result is None:
            return None

        converted, terms = result
        for term in terms:
            self.report.term_converted(term)
        return converted

    def _convert(self, file: str, text: str) -> Optional[Tuple[str, List[str]]]:
        """Rewritten text plus the converted terms, without recording them."""
        matches = self.matcher.find_matches(text)
        if not matches:
            return None

        edits: List[TextEdit] = []
        terms: List[str] = []
        for match in matches:
            reference = match.reference
            if not reference.scopetag:
                reference.scopetag = self.glossary.scopetag
            if not reference.vsntag:
                reference.vsntag = self.vsntag

            entry = self.glossary.lookup(reference.term, reference.scopetag, reference.vsntag)
            if entry is None:
                self.report.term_help(
                    file,
                    line_number(text, match.start),
                    f"Term ref '{match.text}' could not be matched with a MRG entry",
                )
                continue

            replacement = self.renderer.render(entry, reference)
            if not replacement:
                self.report.term_help(
                    file,
                    line_number(text, match.start),
                    f"Conversion of term ref '{match.text}' resulted in an empty string",
                    kind=DiagnosticKind.EMPTY_RENDER,
                )
                continue

            edits.append(TextEdit(match.start, match.end, replacement))
            terms.append(entry.term)

        converted, _ = apply_edits(text, edits)
        return converted, terms
