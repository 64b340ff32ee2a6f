"""
Tests for the compatibility matrix and version constraints.
"""

import pytest

from create_rails_app.core.compatibility import matrix
from create_rails_app.core.compatibility.matrix import BOOLEAN, make_entry
from create_rails_app.core.compatibility.version_constraint import (
    Version,
    bump,
    compare,
    parse_requirement,
    parse_version,
    satisfies,
)
from create_rails_app.core.errors import UnsupportedVersionError
from create_rails_app.core.options import catalog


class TestParseVersion:
    def test_release(self):
        v = parse_version("8.1.2")
        assert v.release == (8, 1, 2)
        assert v.prerelease is None
        assert str(v) == "8.1.2"

    def test_prerelease(self):
        v = parse_version("8.1.0.rc1")
        assert v.release == (8, 1, 0)
        assert v.prerelease == "rc1"
        assert str(v) == "8.1.0.rc1"

    def test_series(self):
        assert parse_version("7.2.2.1").series() == "7.2"
        assert parse_version("8").series() == "8.0"

    @pytest.mark.parametrize("text", ["", "abc", "8..1", "latest"])
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            parse_version(text)


class TestCompare:
    def test_ordering(self):
        assert compare(parse_version("8.1.0"), parse_version("8.0.9")) == 1
        assert compare(parse_version("7.2.0"), parse_version("8.0.0")) == -1

    def test_missing_segments_are_zero(self):
        assert compare(parse_version("8.1"), parse_version("8.1.0")) == 0

    def test_prerelease_below_release(self):
        assert compare(parse_version("8.1.0.beta1"), parse_version("8.1.0")) == -1
        assert compare(parse_version("8.1.0.beta1"), parse_version("8.1.0.rc1")) == -1


class TestRequirement:
    def test_default_operator(self):
        req = parse_requirement("8.1.0")
        assert req.operator == "="
        assert req.version == Version(release=(8, 1, 0))

    def test_bump(self):
        assert bump(parse_version("8.1.0")).release == (8, 2)
        assert bump(parse_version("8.1")).release == (9,)

    def test_pessimistic(self):
        assert satisfies("8.1.0", "~> 8.1.0")
        assert satisfies("8.1.7", "~> 8.1.0")
        assert not satisfies("8.2.0", "~> 8.1.0")
        assert not satisfies("8.0.9", "~> 8.1.0")

    def test_pessimistic_excludes_next_series_prerelease(self):
        assert not satisfies("8.2.0.rc1", "~> 8.1.0")

    def test_pessimistic_excludes_own_prerelease(self):
        assert not satisfies("8.1.0.rc1", "~> 8.1.0")

    def test_other_operators(self):
        assert satisfies("8.0.0", ">= 7.2")
        assert satisfies("7.1.0", "< 7.2")
        assert not satisfies("7.2.0", "!= 7.2.0")


class TestResolve:
    @pytest.mark.parametrize("version,requirement", [
        ("7.2.0", "~> 7.2.0"),
        ("7.2.2.1", "~> 7.2.0"),
        ("8.0.3", "~> 8.0.0"),
        ("8.1.2", "~> 8.1.0"),
    ])
    def test_matches_series(self, version, requirement):
        assert matrix.resolve(version).requirement == requirement

    def test_unsupported_version(self):
        with pytest.raises(UnsupportedVersionError) as exc_info:
            matrix.resolve("6.1.0")
        assert "Supported ranges:" in str(exc_info.value)
        assert exc_info.value.supported_ranges == ["~> 7.2.0", "~> 8.0.0", "~> 8.1.0"]

    def test_malformed_version(self):
        with pytest.raises(UnsupportedVersionError, match="Invalid Rails version"):
            matrix.resolve("not-a-version")

    def test_first_match_wins(self):
        first = make_entry(">= 1.0", {"api": BOOLEAN})
        second = make_entry(">= 1.0", {"api": BOOLEAN, "docker": BOOLEAN})
        assert matrix.resolve("8.1.0", table=(first, second)) is first

    def test_supported_series(self):
        assert matrix.SUPPORTED_SERIES == ("7.2", "8.0", "8.1")
        for series in matrix.SUPPORTED_SERIES:
            matrix.resolve(f"{series}.0")


class TestEntry:
    def test_three_way_allowed_values(self):
        entry = make_entry(">= 0", {"api": BOOLEAN, "database": ["sqlite3"]})
        assert entry.allowed_values("api") is BOOLEAN
        assert entry.allowed_values("database") == ["sqlite3"]
        assert entry.allowed_values("docker") is None

    def test_boolean_distinct_from_empty_list(self):
        entry = make_entry(">= 0", {"database": []})
        assert entry.allowed_values("database") == []
        assert entry.allowed_values("database") is not BOOLEAN

    def test_allowed_values_is_a_copy(self):
        entry = matrix.resolve("8.1.0")
        values = entry.allowed_values("database")
        values.append("oracle")
        assert "oracle" not in entry.allowed_values("database")

    def test_supported_options_is_read_only(self):
        entry = matrix.resolve("8.1.0")
        with pytest.raises(TypeError):
            entry.supported_options["bogus"] = BOOLEAN

    def test_supports(self):
        assert matrix.resolve("8.0.0").supports("kamal")
        assert not matrix.resolve("7.2.0").supports("kamal")

    def test_supported_keys_follow_order(self):
        entry = matrix.resolve("7.2.0")
        keys = entry.supported_keys(catalog.ORDER)
        assert keys == [key for key in catalog.ORDER if entry.supports(key)]
        assert "thruster" not in keys


class TestTable:
    def test_rails_8_adds_mariadb(self):
        assert "mariadb-mysql" in matrix.resolve("8.0.0").allowed_values("database")
        assert "mariadb-mysql" not in matrix.resolve("7.2.0").allowed_values("database")

    def test_rails_8_asset_pipeline_is_boolean(self):
        assert matrix.resolve("8.0.0").allowed_values("asset_pipeline") is BOOLEAN
        assert matrix.resolve("7.2.0").allowed_values("asset_pipeline") == [
            "propshaft", "sprockets",
        ]

    def test_bundler_audit_only_on_8_1(self):
        assert matrix.resolve("8.1.0").supports("bundler_audit")
        assert not matrix.resolve("8.0.0").supports("bundler_audit")

    def test_every_table_key_is_in_catalog(self):
        for entry in matrix.TABLE:
            for key in entry.supported_options:
                assert catalog.is_known(key), key

    def test_rails_8_1_supports_every_option(self):
        entry = matrix.resolve("8.1.0")
        assert entry.supported_keys(catalog.ORDER) == list(catalog.ORDER)
