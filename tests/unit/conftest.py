"""
Pytest Configuration and Fixtures
"""

import pytest
import yaml

from trrt.report import ResolutionReport


def gateway_entry(**overrides):
    entry = {
        "term": "gateway",
        "vsntag": "1.0",
        "scopetag": "ex",
        "locator": "l1",
        "glossaryText": "A network gateway.",
        "navurl": "gw",
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def make_scope(tmp_path):
    """
    Write a scope directory: saf.yaml plus one MRG file per version.

    `mrgs` maps a vsntag to (altvsntags, entries).
    """
    def _make(mrgs=None, website="https://example.org/", scopetag="ex", glossarydir="glossaries"):
        scopedir = tmp_path / "scope"
        (scopedir / glossarydir).mkdir(parents=True, exist_ok=True)

        if mrgs is None:
            mrgs = {"1.0": (["latest"], [gateway_entry()])}

        saf = {
            "scope": {
                "website": website,
                "scopetag": scopetag,
                "scopedir": str(scopedir),
                "curatedir": "terms",
                "glossarydir": glossarydir,
                "mrgfile": "mrg.yaml",
            },
            "scopes": [{"scopetags": ["other"], "scopedir": "https://example.org/other"}],
            "versions": [
                {"vsntag": vsntag, "mrgfile": f"mrg.{scopetag}.{vsntag}.yaml", "altvsntags": alts}
                for vsntag, (alts, _) in mrgs.items()
            ],
        }
        (scopedir / "saf.yaml").write_text(yaml.safe_dump(saf), encoding="utf-8")

        for vsntag, (alts, entries) in mrgs.items():
            mrg = {
                "terminology": {
                    "scopetag": scopetag,
                    "scopedir": str(scopedir),
                    "curatedir": "terms",
                    "vsntag": vsntag,
                    "altvsntags": alts,
                },
                "scopes": [],
                "entries": entries,
            }
            path = scopedir / glossarydir / f"mrg.{scopetag}.{vsntag}.yaml"
            path.write_text(yaml.safe_dump(mrg), encoding="utf-8")

        return scopedir

    return _make


@pytest.fixture
def entry_factory():
    """Raw MRG entry dicts, based on the `gateway` entry."""
    return gateway_entry


@pytest.fixture
def report():
    return ResolutionReport()
