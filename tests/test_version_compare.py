"""Tests for version ordering."""

import itertools

import pytest

from versioning import compare_versions, newest, parse_version, version_key


@pytest.mark.parametrize("a,b,expected", [
    ("1.1.2", "1.1.3", -1),
    ("1.2.2-1", "1.2.2", 1),
    ("1:0.1-1", "1.2-5", 1),
    ("0.1.2b", "0.1.2a", 1),
    ("0.1.2b", "0.1.2rc3", -1),
    ("0.1-5", "0.1-5", 0),
    ("0.1-5", "0.1-6", -1),
    ("0.1-6", "0.1-1", 1),
])
def test_documented_examples(a, b, expected):
    assert compare_versions(a, b) == expected


def test_accepts_version_objects():
    assert compare_versions(parse_version("1.10"), parse_version("1.9")) == 1


class TestSegments:
    """Segment-level rules."""

    def test_numeric_not_lexical(self):
        assert compare_versions("1.10", "1.9") == 1

    def test_suffix_sorts_below_bare(self):
        assert compare_versions("1.0rc1", "1.0") == -1
        assert compare_versions("1.0", "1.0rc1") == 1

    def test_leading_digits_decide_before_suffix(self):
        assert compare_versions("1.2a", "1.10") == -1

    def test_more_segments_is_newer(self):
        assert compare_versions("1.0.1", "1.0") == 1
        assert compare_versions("1.0", "1.0.0") == -1

    def test_leading_zeros_are_equal(self):
        assert compare_versions("1.01", "1.1") == 0

    def test_non_numeric_segment(self):
        assert compare_versions("1.beta", "1.alpha") == 1


class TestEpochAndRelease:
    """Epoch overrides, release breaks ties."""

    def test_epoch_overrides_upstream(self):
        assert compare_versions("1:0.1", "9.9-9") == 1
        assert compare_versions("1:9.9", "2:0.1") == -1

    def test_absent_release_is_lower(self):
        assert compare_versions("1.0", "1.0-1") == -1

    def test_release_numeric(self):
        assert compare_versions("1.0-10", "1.0-9") == 1


class TestNull:
    """The null version is the minimum."""

    def test_both_null(self):
        assert compare_versions("0:0.0-0", "0.0") == 0

    @pytest.mark.parametrize("other", ["0", "0.0.0", "0.0-1", "0.0a", "1:0.0"])
    def test_null_below_everything(self, other):
        assert compare_versions("0.0", other) == -1
        assert compare_versions(other, "0.0") == 1


SAMPLE = [
    "0.0", "0.1", "0.1-1", "0.1-5", "0.1.2a", "0.1.2b", "0.1.2rc3", "0.1.2",
    "1.0rc1", "1.0", "1.0-2", "1.0.1", "1.2a", "1.10", "2:0.1", "1:3.0-1",
]


def test_antisymmetric():
    for a, b in itertools.product(SAMPLE, repeat=2):
        assert compare_versions(a, b) == -compare_versions(b, a)


def test_transitive():
    for a, b, c in itertools.product(SAMPLE, repeat=3):
        if compare_versions(a, b) <= 0 and compare_versions(b, c) <= 0:
            assert compare_versions(a, c) <= 0


def test_sorting_with_version_key():
    ordered = sorted(["1.0", "1:0.1", "1.0rc1", "0.0", "1.0-1", "0.9"], key=version_key)
    assert ordered == ["0.0", "0.9", "1.0rc1", "1.0", "1.0-1", "1:0.1"]


def test_newest():
    assert str(newest(["1.2", "1.10", "1.9-3"])) == "1.10"
    assert newest([]) is None
