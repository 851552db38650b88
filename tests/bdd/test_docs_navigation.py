"""Behaviour tests for reading pages and navigation from a docs tree.

The scenarios in ``features/docs_navigation.feature`` build a temporary docs
directory, drive :class:`~docs_provider.DocsProvider` through it, and check that
missing content degrades to empty results and that ``meta.json`` is only
re-read after the cache is cleared.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_docs_navigation.py -v
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from pytest_bdd import given, scenarios, then, when

from docs_provider import DocsProvider

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "docs_navigation.feature"
)
scenarios(FEATURE_FILE)

PLAIN_PAGE = "# Plain\n\nNo metadata on this page.\n"
MIXED_PAGE = '---\ntitle: "Mixed"\ndescription: no quotes here\n---\nBody\n'

ScenarioState = dict[str, typ.Any]


def _section(section_id: str, *files: str) -> dict[str, typ.Any]:
    pages = []
    for name in files:
        stem = name.removesuffix(".md")
        pages.append({"file": name, "title": stem, "slug": stem})
    return {"id": section_id, "title": section_id.title(), "icon": "", "pages": pages}


def _write_meta(root: Path, sections: list[dict[str, typ.Any]]) -> None:
    (root / "meta.json").write_bytes(msgspec_json.encode({"sections": sections}))


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _new_tree(tmp_path: Path, scenario_state: ScenarioState) -> Path:
    root = tmp_path / "docs"
    root.mkdir()
    scenario_state["root"] = root
    scenario_state["provider"] = DocsProvider(root)
    return root


@given("an empty docs tree")
def given_empty_tree(tmp_path: Path, scenario_state: ScenarioState) -> None:
    _new_tree(tmp_path, scenario_state)


@given("a docs tree with a page that has no frontmatter")
def given_plain_page(tmp_path: Path, scenario_state: ScenarioState) -> None:
    root = _new_tree(tmp_path, scenario_state)
    (root / "guide").mkdir()
    (root / "guide" / "plain.md").write_text(PLAIN_PAGE, encoding="utf-8")
    scenario_state["page"] = "guide/plain.md"
    scenario_state["original"] = PLAIN_PAGE


@given("a docs tree with a page whose frontmatter has an unquoted value")
def given_mixed_page(tmp_path: Path, scenario_state: ScenarioState) -> None:
    root = _new_tree(tmp_path, scenario_state)
    (root / "guide").mkdir()
    (root / "guide" / "mixed.md").write_text(MIXED_PAGE, encoding="utf-8")
    scenario_state["page"] = "guide/mixed.md"


@given("a docs tree with two sections")
def given_two_sections(tmp_path: Path, scenario_state: ScenarioState) -> None:
    root = _new_tree(tmp_path, scenario_state)
    _write_meta(root, [_section("a", "one.md"), _section("b", "two.md")])


@when("I load the navigation")
def when_load_navigation(scenario_state: ScenarioState) -> None:
    docs: DocsProvider = scenario_state["provider"]
    scenario_state["meta"] = docs.get_meta()


@when("meta.json is rewritten with a third section")
def when_meta_rewritten(scenario_state: ScenarioState) -> None:
    _write_meta(
        scenario_state["root"],
        [_section("a", "one.md"), _section("b", "two.md"), _section("c", "three.md")],
    )


@when("I parse that page")
def when_parse_page(scenario_state: ScenarioState) -> None:
    docs: DocsProvider = scenario_state["provider"]
    scenario_state["parsed"] = docs.parse(scenario_state["page"])


@when("I clear the cache")
def when_clear_cache(scenario_state: ScenarioState) -> None:
    docs: DocsProvider = scenario_state["provider"]
    docs.clear_cache()


@then("the descriptor is empty")
def then_descriptor_empty(scenario_state: ScenarioState) -> None:
    assert scenario_state["meta"] == {}, "expected an empty meta mapping"


@then("there are no sections or paths")
def then_no_sections(scenario_state: ScenarioState) -> None:
    docs: DocsProvider = scenario_state["provider"]
    assert docs.get_sections() == []
    assert docs.get_all_paths() == []


@then("the frontmatter is empty")
def then_frontmatter_empty(scenario_state: ScenarioState) -> None:
    parsed = scenario_state["parsed"]
    assert parsed is not None, "expected the page to be found"
    assert parsed.frontmatter == {}


@then("the content equals the original file")
def then_content_unchanged(scenario_state: ScenarioState) -> None:
    docs: DocsProvider = scenario_state["provider"]
    assert scenario_state["parsed"].content == scenario_state["original"]
    assert docs.read_content(scenario_state["page"]) == scenario_state["original"]


@then("only the quoted key is present in the frontmatter")
def then_only_quoted_key(scenario_state: ScenarioState) -> None:
    parsed = scenario_state["parsed"]
    assert parsed is not None, "expected the page to be found"
    assert parsed.frontmatter == {"title": "Mixed"}, (
        f"expected only the quoted title, got {parsed.frontmatter!r}"
    )


@then("the paths still list two pages")
def then_two_paths(scenario_state: ScenarioState) -> None:
    docs: DocsProvider = scenario_state["provider"]
    assert docs.get_all_paths() == ["a/one.md", "b/two.md"]


@then("the paths list three pages")
def then_three_paths(scenario_state: ScenarioState) -> None:
    docs: DocsProvider = scenario_state["provider"]
    assert docs.get_all_paths() == ["a/one.md", "b/two.md", "c/three.md"]
