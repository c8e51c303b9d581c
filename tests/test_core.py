from __future__ import annotations

from libdef_resolver.core import (
    collect_candidates,
    find_overlaps,
    merge_problems,
    resolve,
    validate_definitions,
)
from libdef_resolver.errors import InvalidRangeOperatorError, OverlapValidationError
from libdef_resolver.models import LibDefIdentity, LibDefRange
from libdef_resolver.parsers.version import parse_target

LODASH = LibDefIdentity("lodash", "v4.x.x")
UNDERSCORE = LibDefIdentity("underscore", "v1.x.x")


def _range(identity: LibDefIdentity, text: str) -> LibDefRange:
    return LibDefRange.from_strings(identity.pkg_name, identity.pkg_version, text)


def test_resolve_expands_candidate_wildcards_against_the_target() -> None:
    early = _range(LODASH, ">=v0.2.x_<=v0.4.x")
    late = _range(LODASH, ">=v0.5.x")
    assert resolve(parse_target("0.2.7"), [early, late]) == [early]
    assert resolve(parse_target("v0.5.3"), [early, late]) == [late]
    assert resolve(parse_target("0.1.0"), [early, late]) == []


def test_resolve_wildcards_only_stand_for_a_single_digit() -> None:
    any_minor = _range(LODASH, "v0.x.x")
    assert resolve(parse_target("0.5.2"), [any_minor]) == [any_minor]
    assert resolve(parse_target("0.15.0"), [any_minor]) == []
    assert resolve(parse_target("0.40.0"), [_range(LODASH, ">=v0.5.x")]) == []


def test_resolve_keeps_every_match_in_input_order() -> None:
    first = _range(UNDERSCORE, ">=v0.3.x")
    second = _range(LODASH, "v0.x.x")
    skipped = _range(LODASH, "v0.4.x")
    third = _range(LODASH, "v0.3.4")
    assert resolve(parse_target("0.3.4"), [first, second, skipped, third]) == [first, second, third]


def test_resolve_renders_wildcard_targets_as_x_ranges() -> None:
    inside = _range(LODASH, "v0.4.7")
    outside = _range(LODASH, "v0.5.0")
    assert resolve(parse_target("0.4.x"), [inside, outside]) == [inside]


def test_resolve_simplifies_candidate_ranges() -> None:
    pinched = _range(LODASH, "<=v0.4.0_>=v0.4.0")
    assert resolve(parse_target("0.9.0"), [pinched]) == [pinched]
    assert resolve(parse_target("0.15.0"), [pinched]) == []
    assert resolve(parse_target("1.0.0"), [pinched]) == []


def test_find_overlaps_reports_intersecting_ranges() -> None:
    early = _range(LODASH, ">=v0.2.x_<=v0.4.x")
    late = _range(LODASH, ">=v0.4.x")
    assert find_overlaps([early, late]) == {
        LODASH: [OverlapValidationError(identity=LODASH, first=early.version, second=late.version)]
    }


def test_find_overlaps_ignores_disjoint_ranges() -> None:
    candidates = [
        _range(LODASH, ">=v0.2.x_<=v0.4.x"),
        _range(LODASH, ">=v0.5.x"),
        _range(LODASH, "<=v0.1.x"),
    ]
    assert find_overlaps(candidates) == {}


def test_find_overlaps_only_compares_within_an_identity() -> None:
    candidates = [_range(LODASH, ">=v0.2.x"), _range(UNDERSCORE, ">=v0.2.x")]
    assert find_overlaps(candidates) == {}


def test_find_overlaps_reports_every_pair_and_every_identity() -> None:
    candidates = [
        _range(LODASH, ">=v0.10.x"),
        _range(UNDERSCORE, "v0.40.0"),
        _range(LODASH, ">=v0.20.x"),
        _range(UNDERSCORE, "v0.40.x"),
        _range(LODASH, "v0.30.x"),
    ]
    overlaps = find_overlaps(candidates)
    assert list(overlaps) == [LODASH, UNDERSCORE]
    assert len(overlaps[LODASH]) == 3
    assert len(overlaps[UNDERSCORE]) == 1
    assert all(err.identity == LODASH for err in overlaps[LODASH])


def test_find_overlaps_flags_duplicate_ranges() -> None:
    candidates = [_range(LODASH, ">=v0.2.x"), _range(LODASH, ">=v0.2.x")]
    assert len(find_overlaps(candidates)[LODASH]) == 1


def test_overlap_error_message_names_both_ranges() -> None:
    early = _range(LODASH, ">=v0.2.x_<=v0.4.x")
    late = _range(LODASH, ">=v0.4.x")
    [err] = find_overlaps([early, late])[LODASH]
    assert ">=v0.2.x_<=v0.4.x" in str(err)
    assert ">=v0.4.x" in str(err)
    assert err.to_dict()["identity"] == "lodash@v4.x.x"


def test_collect_candidates_keeps_parse_errors_per_identity() -> None:
    candidates, problems = collect_candidates(
        [
            ("lodash", "v4.x.x", "flow_>=v0.2.x"),
            ("lodash", "v4.x.x", "flow_>v0.1.0"),
            ("underscore", "v1.x.x", "flow_v0.40.x"),
        ],
        prefix="flow_",
    )
    assert [c.identity for c in candidates] == [LODASH, UNDERSCORE]
    assert list(problems) == [LODASH]
    [err] = problems[LODASH]
    assert isinstance(err, InvalidRangeOperatorError)


def test_collect_candidates_without_prefix_parses_bare_ranges() -> None:
    candidates, problems = collect_candidates([("lodash", "v4.x.x", ">=v0.2.x")])
    assert problems == {}
    assert candidates == [_range(LODASH, ">=v0.2.x")]


def test_merge_problems_returns_a_new_mapping() -> None:
    early = _range(LODASH, ">=v0.2.x")
    late = _range(LODASH, ">=v0.3.x")
    overlap = OverlapValidationError(LODASH, early.version, late.version)
    first = {LODASH: [overlap]}
    second = {LODASH: [overlap], UNDERSCORE: []}

    merged = merge_problems(first, second)

    assert merged == {LODASH: [overlap, overlap]}
    assert first == {LODASH: [overlap]}
    assert merged[LODASH] is not first[LODASH]


def test_validate_definitions_reports_parse_and_overlap_problems() -> None:
    result = validate_definitions(
        [
            ("lodash", "v4.x.x", ">=v0.2.x_<=v0.4.x"),
            ("lodash", "v4.x.x", ">=v0.3.x"),
            ("underscore", "v1.x.x", "v0.x"),
            ("underscore", "v1.x.x", "v0.40.x"),
        ]
    )
    assert not result.ok
    assert len(result.candidates) == 3
    assert list(result.problems) == [UNDERSCORE, LODASH]
    assert result.problem_count == 2


def test_validate_definitions_clean_batch() -> None:
    result = validate_definitions(
        [
            ("lodash", "v4.x.x", "flow_>=v0.2.x_<=v0.4.x"),
            ("lodash", "v4.x.x", "flow_>=v0.5.x"),
        ],
        prefix="flow_",
    )
    assert result.ok
    assert result.problem_count == 0
    assert len(result.candidates) == 2
