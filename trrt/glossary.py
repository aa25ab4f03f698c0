"""
Glossary Index
Runtime glossary assembled from a scope's terminology (MRG) files.
"""
import re
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urlsplit

import yaml
from pydantic import ValidationError

from .exceptions import (
    GlossaryNotInitializedError,
    ScopeAdminError,
    TerminologyFileError,
    TerminologyNotFoundError,
)
from .report import ResolutionReport
from .schemas import (
    GlossaryEntry,
    ScopeAdminFile,
    TerminologyFile,
    missing_required_fields,
)

logger = logging.getLogger(__name__)

SAF_FILENAME = "saf.yaml"
MRG_PATTERN = "mrg.*.*.yaml"

# Macro token -> suffix variants
MACROS: Dict[str, List[str]] = {
    "{ss}": ["s"],
    "{yies}": ["ys", "ies"],
    "{ying}": ["ier", "ying", "ies", "ied"],
}

_TEXT_TAGS = {
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}


class TagLoader(yaml.SafeLoader):
    """
    SafeLoader that reads unquoted numbers and dates as the text written.

    Version tags like `1.10` or `2023-01-01` must survive loading as-is;
    booleans and nulls keep their usual meaning.
    """


TagLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_yaml(stream) -> Any:
    """Parse one YAML document with TagLoader."""
    return yaml.load(stream, Loader=TagLoader)


_MACRO_TOKEN = re.compile("|".join(re.escape(token) for token in MACROS))
_UNRESOLVED_TOKEN = re.compile(r"\{[^{}]*\}")


def expand_form_phrases(form_phrases: Optional[str]) -> List[str]:
    """
    Expand a comma separated formPhrases value into alternate terms.

    The first macro token of each phrase is replaced by every variant
    from MACROS. Generated phrases are not scanned again, and phrases
    that still hold a token are left out.

    >>> expand_form_phrases("gateway{ss}, gate-way")
    ['gate-way', 'gateways']
    """
    if not form_phrases:
        return []

    phrases = [p.strip() for p in str(form_phrases).split(",") if p.strip()]
    candidates = list(phrases)
    for phrase in phrases:
        token = _MACRO_TOKEN.search(phrase)
        if token:
            for variant in MACROS[token.group(0)]:
                candidates.append(phrase.replace(token.group(0), variant, 1))

    alternates: List[str] = []
    for candidate in candidates:
        if _UNRESOLVED_TOKEN.search(candidate) or candidate in alternates:
            continue
        alternates.append(candidate)
    return alternates


def join_url(website: str, navurl: Optional[str]) -> str:
    """Resolve an entry's navurl against the scope website."""
    if not navurl:
        return website
    if urlsplit(navurl).scheme or not website:
        return navurl
    return f"{website.rstrip('/')}/{navurl.lstrip('/')}"


def _read_yaml(path: Path, error_cls) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = load_yaml(f)
    except OSError as e:
        raise error_cls(path, f"cannot be read ({e})") from e
    except yaml.YAMLError as e:
        raise error_cls(path, f"is not valid YAML ({e})") from e

    if not isinstance(data, dict):
        raise error_cls(path, "does not contain a mapping")
    return data


class GlossaryIndex:
    """
    Queryable runtime glossary for one scope.

    Construction loads the Scope Administration File; `initialize()`
    reads every MRG in the scope's glossary directory. Lookups are only
    possible after initialization.

    Usage:
        glossary = GlossaryIndex("path/to/scope")
        glossary.initialize()
        entry = glossary.lookup("gateway", "ex", "1.0")
    """

    def __init__(
        self,
        scopedir: Union[str, Path],
        report: Optional[ResolutionReport] = None,
    ):
        self.scopedir = Path(scopedir)
        self.report = report if report is not None else ResolutionReport()
        self.saf = self._load_saf(self.scopedir / SAF_FILENAME)

        self._entries: List[GlossaryEntry] = []
        self._by_key: Dict[Tuple[str, str], List[GlossaryEntry]] = {}
        self._initialized = False

    # ==================== SAF ====================

    @staticmethod
    def _load_saf(path: Path) -> ScopeAdminFile:
        data = _read_yaml(path, ScopeAdminError)
        try:
            saf = ScopeAdminFile.model_validate(data)
        except ValidationError as e:
            raise ScopeAdminError(path, f"invalid content ({e})") from e
        logger.debug(f"Loaded SAF for scope '{saf.scope.scopetag}' from {path}")
        return saf

    @property
    def scopetag(self) -> str:
        return self.saf.scope.scopetag

    @property
    def website(self) -> str:
        return self.saf.scope.website

    @property
    def glossary_dir(self) -> Path:
        return self.scopedir / self.saf.scope.glossarydir

    # ==================== RUNTIME GLOSSARY ====================

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def entries(self) -> Tuple[GlossaryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def initialize(self) -> List[GlossaryEntry]:
        """
        Build the runtime glossary from all MRG files.

        Raises:
            TerminologyNotFoundError: no MRG file in the glossary directory
            TerminologyFileError: an MRG file cannot be read or parsed
        """
        mrg_files = sorted(p for p in self.glossary_dir.glob(MRG_PATTERN) if p.is_file())
        if not mrg_files:
            raise TerminologyNotFoundError(self.glossary_dir, MRG_PATTERN)

        self._entries = []
        self._by_key = {}
        self._initialized = False

        for path in mrg_files:
            mrg = self._load_mrg(path)
            added = self.add_terminology(mrg, source=str(path))
            logger.info(f"Loaded {added} glossary entries from {path.name}")

        self._initialized = True
        logger.info(
            f"Runtime glossary for scope '{self.scopetag}' has "
            f"{len(self._entries)} entries from {len(mrg_files)} MRG file(s)"
        )
        return list(self._entries)

    @staticmethod
    def _load_mrg(path: Path) -> TerminologyFile:
        data = _read_yaml(path, TerminologyFileError)
        try:
            return TerminologyFile.model_validate(data)
        except ValidationError as e:
            raise TerminologyFileError(path, f"invalid content ({e})") from e

    def add_terminology(self, mrg: TerminologyFile, source: str = "<mrg>") -> int:
        """
        Add the valid entries of one MRG, each followed by its alternate forms.

        Returns:
            Number of runtime entries added
        """
        added = 0
        for index, raw in enumerate(mrg.entries, start=1):
            entry = self._build_entry(raw, mrg, source, index)
            if entry is None:
                continue

            self._add(entry)
            added += 1
            for alternate in expand_form_phrases(entry.form_phrases):
                self._add(entry.model_copy(update={"term": alternate}))
                added += 1
        return added

    def _build_entry(
        self,
        raw: Any,
        mrg: TerminologyFile,
        source: str,
        index: int,
    ) -> Optional[GlossaryEntry]:
        if not isinstance(raw, dict):
            self.report.entry_dropped(source, f"Entry #{index} is not a mapping")
            return None

        label = raw.get("term") or f"#{index}"
        missing = missing_required_fields(raw)
        if missing:
            self.report.entry_dropped(
                source, f"Entry '{label}' dropped, missing {', '.join(missing)}"
            )
            return None

        navurl = raw.get("navurl")
        data = dict(raw)
        data["altvsntags"] = list(mrg.terminology.altvsntags)
        data["navurl"] = join_url(self.website, str(navurl) if navurl is not None else None)

        try:
            return GlossaryEntry.model_validate(data)
        except ValidationError as e:
            self.report.entry_dropped(source, f"Entry '{label}' dropped, invalid ({e.error_count()} errors)")
            return None

    def _add(self, entry: GlossaryEntry):
        self._entries.append(entry)
        self._by_key.setdefault((entry.term, entry.scopetag), []).append(entry)

    def lookup(self, term: str, scopetag: str, vsntag: str) -> Optional[GlossaryEntry]:
        """
        Find the entry for a term within a scope and version.

        An entry whose own vsntag equals `vsntag` is preferred over one
        that only lists it in its altvsntags.

        Returns:
            The matching entry, or None

        Raises:
            GlossaryNotInitializedError: called before `initialize()`
        """
        if not self._initialized:
            raise GlossaryNotInitializedError("Runtime glossary has not been initialized")

        candidates = self._by_key.get((term, scopetag), [])
        for entry in candidates:
            if entry.vsntag == vsntag:
                return entry
        for entry in candidates:
            if vsntag in entry.altvsntags:
                return entry
        return None
