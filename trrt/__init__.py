"""
Term Reference Resolution Tool (trrt)

Rewrites inline term references in text files into links, resolved
against the runtime glossary of a terminology scope.

Features:
- Standard `[text](id#trait@scope:version)` and alternate
  `[text@scope:version](id#trait)` syntax, or a custom pattern
- Runtime glossary built from all MRG files of a scope, with alternate
  term forms expanded from formPhrases
- Markdown, HTML and custom Jinja2 output templates

Usage:
    from trrt import GlossaryIndex, TermPatternMatcher, TemplateRenderer, ResolutionEngine

    glossary = GlossaryIndex("path/to/scope")
    engine = ResolutionEngine(
        glossary, TermPatternMatcher(), TemplateRenderer(), output_dir="out",
        glob_pattern="docs/*.md",
    )
    engine.resolve()
    print(engine.report.summary())
"""

from .engine import EngineState, ResolutionEngine, apply_edits
from .exceptions import (
    ConfigurationError,
    GlossaryNotInitializedError,
    GrammarError,
    ScopeAdminError,
    TemplateConfigError,
    TermResolverError,
    TerminologyFileError,
    TerminologyNotFoundError,
)
from .glossary import GlossaryIndex, expand_form_phrases
from .matcher import TermPatternMatcher, derive_term
from .models import TermMatch, TermReference, TextEdit
from .renderer import TemplateRenderer
from .report import Diagnostic, DiagnosticKind, ResolutionReport
from .schemas import GlossaryEntry, ScopeAdminFile, TerminologyFile

__version__ = "1.0.0"
__all__ = [
    # Components
    "TermPatternMatcher",
    "GlossaryIndex",
    "TemplateRenderer",
    "ResolutionEngine",
    "EngineState",
    # Helpers
    "apply_edits",
    "derive_term",
    "expand_form_phrases",
    # Models
    "GlossaryEntry",
    "ScopeAdminFile",
    "TerminologyFile",
    "TermReference",
    "TermMatch",
    "TextEdit",
    "Diagnostic",
    "DiagnosticKind",
    "ResolutionReport",
    # Exceptions
    "TermResolverError",
    "ScopeAdminError",
    "TerminologyNotFoundError",
    "TerminologyFileError",
    "GlossaryNotInitializedError",
    "GrammarError",
    "TemplateConfigError",
    "ConfigurationError",
]
