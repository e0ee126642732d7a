"""Unit tests for placeholder injection and version bumping."""

from __future__ import annotations

from sitsync.rulepack import PlaceholderTable, RulePackPatcher, VersionTuple, bump_build, read_version
from tests.conftest import RULE_PACK, TOKEN_CLINICAL, TOKEN_CODENAMES, TOKEN_DRUGS

IDENTITIES = {
    TOKEN_CLINICAL: "0c5e9f7a-1111-4c1d-9a51-6f2b8e3d4c01",
    TOKEN_DRUGS: "0c5e9f7a-2222-4c1d-9a51-6f2b8e3d4c02",
    TOKEN_CODENAMES: "0c5e9f7a-3333-4c1d-9a51-6f2b8e3d4c03",
}


def _patcher() -> RulePackPatcher:
    return RulePackPatcher(PlaceholderTable())


def test_all_identities_replace_every_placeholder() -> None:
    result = _patcher().patch(RULE_PACK, IDENTITIES)
    for token, identity in IDENTITIES.items():
        assert token not in result.text
        assert result.text.count(f'idRef="{identity}"') == 1
    assert result.replaced == {token: 1 for token in IDENTITIES}
    assert result.missing == []
    assert result.complete
    assert result.changed


def test_partial_identities_leave_other_placeholders_verbatim() -> None:
    result = _patcher().patch(RULE_PACK, {TOKEN_DRUGS: IDENTITIES[TOKEN_DRUGS]})
    assert f'idRef="{IDENTITIES[TOKEN_DRUGS]}"' in result.text
    assert f'idRef="{TOKEN_CLINICAL}"' in result.text
    assert f'idRef="{TOKEN_CODENAMES}"' in result.text
    assert result.missing == [TOKEN_CLINICAL, TOKEN_CODENAMES]
    assert not result.complete
    assert "skipped ffffffff-0000-4000-8000-000000000001: no identity resolved" in result.summary_lines()


def test_only_exact_attribute_values_are_replaced() -> None:
    text = (
        f'<Match idRef="{TOKEN_CLINICAL}"/>\n'
        f'<Match idRef="{TOKEN_CLINICAL.upper()}"/>\n'
        f'<Match idRef="{TOKEN_CLINICAL}-suffix"/>\n'
        f"<Note>{TOKEN_CLINICAL}</Note>\n"
    )
    result = _patcher().patch(text, {TOKEN_CLINICAL: "abc"})
    assert result.text.splitlines() == [
        '<Match idRef="abc"/>',
        f'<Match idRef="{TOKEN_CLINICAL.upper()}"/>',
        f'<Match idRef="{TOKEN_CLINICAL}-suffix"/>',
        f"<Note>{TOKEN_CLINICAL}</Note>",
    ]


def test_attribute_suffix_match_is_not_replaced() -> None:
    text = f'<Match xidRef="{TOKEN_CLINICAL}"/>\n<Match\tidRef="{TOKEN_CLINICAL}"/>\n'
    patcher = _patcher()
    result = patcher.patch(text, {TOKEN_CLINICAL: "abc"})
    assert result.text == f'<Match xidRef="{TOKEN_CLINICAL}"/>\n<Match\tidRef="abc"/>\n'
    assert result.replaced == {TOKEN_CLINICAL: 1}
    assert patcher.unresolved(f'<Match xidRef="{TOKEN_CLINICAL}"/>') == []


def test_repeated_placeholder_is_replaced_everywhere() -> None:
    text = f'<a idRef="{TOKEN_DRUGS}"/><b idRef="{TOKEN_DRUGS}"/>'
    result = _patcher().patch(text, {TOKEN_DRUGS: "X"})
    assert result.text == '<a idRef="X"/><b idRef="X"/>'
    assert result.replaced == {TOKEN_DRUGS: 2}


def test_token_without_identity_and_not_in_text_is_absent_not_missing() -> None:
    text = f'<Match idRef="{TOKEN_CLINICAL}"/>'
    result = _patcher().patch(text, {TOKEN_CLINICAL: "X"})
    assert result.absent == [TOKEN_DRUGS, TOKEN_CODENAMES]
    assert result.missing == []


def test_second_run_without_new_identities_changes_nothing() -> None:
    patcher = _patcher()
    first = patcher.patch(RULE_PACK, IDENTITIES)
    second = patcher.patch(first.text, {})
    assert not second.changed
    assert second.text == first.text
    assert second.summary_lines()[-1] == "no changes"


def test_custom_reference_attribute() -> None:
    patcher = RulePackPatcher({"AAAA": "terms"}, attribute="identity-reference")
    result = patcher.patch('<Match identity-reference="AAAA"/><Match idRef="AAAA"/>', {"AAAA": "BBBB"})
    assert result.text == '<Match identity-reference="BBBB"/><Match idRef="AAAA"/>'


def test_version_build_is_incremented() -> None:
    result = _patcher().patch(RULE_PACK, {}, bump_version=True)
    assert result.version_before == VersionTuple(7, 0, 2, 0)
    assert result.version_after == VersionTuple(7, 0, 3, 0)
    assert '<Version major="7" minor="0" build="3" revision="0"/>' in result.text
    assert "version 7.0.2.0 -> 7.0.3.0" in result.summary_lines()


def test_version_untouched_when_not_requested() -> None:
    result = _patcher().patch(RULE_PACK, {})
    assert read_version(result.text) == VersionTuple(7, 0, 2, 0)
    assert result.version_before is None
    assert not result.changed


def test_missing_version_element_is_a_noop() -> None:
    text = '<RulePack id="x">\n  <Match idRef="other"/>\n</RulePack>\n'
    result = _patcher().patch(text, {}, bump_version=True)
    assert result.text == text
    assert not result.changed
    assert "version element not found; version unchanged" in result.summary_lines()


def test_malformed_version_element_is_a_noop() -> None:
    text = '<Version major="7" minor="0" build="two" revision="0"/>'
    assert bump_build(text) == (text, None, None)
    incomplete = '<Version major="7" minor="0" build="2"/>'
    assert bump_build(incomplete) == (incomplete, None, None)
    superscript = '<Version major="7" minor="0" build="²" revision="0"/>'
    assert read_version(superscript) is None
    assert bump_build(superscript) == (superscript, None, None)


def test_duplicate_version_elements_are_a_noop() -> None:
    text = (
        '<Version major="1" minor="0" build="1" revision="0"/>\n'
        '<Version major="1" minor="0" build="5" revision="0"/>\n'
    )
    assert read_version(text) is None
    assert bump_build(text)[0] == text


def test_version_attribute_order_and_spacing_preserved() -> None:
    text = '<Version build="9"  revision="4" major="2" minor="1" />'
    updated, before, after = bump_build(text)
    assert updated == '<Version build="10"  revision="4" major="2" minor="1" />'
    assert before == VersionTuple(2, 1, 9, 4)
    assert after == VersionTuple(2, 1, 10, 4)


def test_end_to_end_substitution_and_bump() -> None:
    text = (
        '<RulePack id="p">\n'
        '  <Version major="1" minor="2" build="3" revision="4"/>\n'
        '  <Match idRef="AAAA"/>\n'
        "</RulePack>\n"
    )
    patcher = RulePackPatcher(PlaceholderTable({"AAAA": "terms"}))
    result = patcher.patch(text, {"AAAA": "BBBB"}, bump_version=True)
    assert '<Match idRef="BBBB"/>' in result.text
    assert "AAAA" not in result.text
    assert read_version(result.text) == VersionTuple(1, 2, 4, 4)
    assert result.changed


def test_unresolved_lists_tokens_still_present() -> None:
    patcher = _patcher()
    assert patcher.unresolved(RULE_PACK) == [TOKEN_CLINICAL, TOKEN_DRUGS, TOKEN_CODENAMES]
    assert patcher.unresolved(patcher.patch(RULE_PACK, IDENTITIES).text) == []


def test_placeholder_table_identity_map_skips_unresolved_names() -> None:
    table = PlaceholderTable({"T1": "a", "T2": "b", "T3": "a"})
    assert table.dictionary_names() == ["a", "b"]
    assert table.identity_map({"a": "id-a", "b": None}) == {"T1": "id-a", "T3": "id-a"}
