"""Tests for check-constraint pattern extraction."""

import pytest

from schema_doctor.schema.constraints import (
    extract_check_predicate,
    length_limit_from_constraint,
    length_limit_from_constraints,
)


class TestLengthLimitFromConstraint:
    """Recognized length-bound shapes yield the integer limit."""

    def test_plain_length(self) -> None:
        """length(email) <= 64 limits email to 64."""
        assert length_limit_from_constraint("length(email) <= 64", "email") == 64

    def test_quoted_column_with_cast(self) -> None:
        """PostgreSQL's quoted, cast rendering is recognized."""
        assert length_limit_from_constraint('char_length("name"::text) <= 32', "name") == 32

    @pytest.mark.parametrize(
        "expression",
        [
            "char_length(name::text) <= 32",
            "character_length(name) <= 32",
            "CHAR_LENGTH(`name`) <= 32",
            "LENGTH( name ) <= 32",
            "length('name')<=32",
            "pg_catalog.char_length(name::character varying) <= 32",
            "(char_length(name) <= 32)",
            "char_length(title) <= 10 AND char_length(name) <= 32",
        ],
    )
    def test_dialect_variants(self, expression: str) -> None:
        """Case, quoting, casts, qualification and whitespace are tolerated."""
        assert length_limit_from_constraint(expression, "name") == 32

    @pytest.mark.parametrize(
        "expression",
        [
            "length(email) >= 64",
            "length(email) < 64",
            "length(email_address) <= 64",
            "length(user_email) <= 64",
            "octet_length(email) <= 64",
            "email IS NOT NULL",
            "",
        ],
    )
    def test_unrecognized_yields_none(self, expression: str) -> None:
        """Anything outside the recognized shape yields no limit."""
        assert length_limit_from_constraint(expression, "email") is None

    def test_column_name_is_not_a_pattern(self) -> None:
        """Regex metacharacters in column names are matched literally."""
        assert length_limit_from_constraint("length(a.b) <= 5", "a.b") == 5
        assert length_limit_from_constraint("length(axb) <= 5", "a.b") is None


class TestLengthLimitFromConstraints:
    """The first matching expression wins."""

    def test_first_match_wins(self) -> None:
        expressions = ["status IN ('a', 'b')", "length(email) <= 64", "length(email) <= 32"]
        assert length_limit_from_constraints(expressions, "email") == 64

    def test_no_expressions(self) -> None:
        assert length_limit_from_constraints([], "email") is None


class TestExtractCheckPredicate:
    """pg_get_constraintdef output is unwrapped."""

    def test_unwraps_check(self) -> None:
        assert (
            extract_check_predicate("CHECK (char_length(name::text) <= 32)")
            == "char_length(name::text) <= 32"
        )

    def test_multiline_definition(self) -> None:
        definition = "CHECK (status = 'a'\n    OR status = 'b')"
        assert extract_check_predicate(definition) == "status = 'a'\n    OR status = 'b'"

    def test_not_a_check(self) -> None:
        assert extract_check_predicate("FOREIGN KEY (user_id) REFERENCES users(id)") is None
