"""Unit tests for UUID tag classification."""

from unittest.mock import patch

from tag_uuid_sync.core.classify import (
    TagMatch,
    classify_tags,
    clean_uuid,
    doi_tag,
    is_valid_uuid,
    split_tags,
)

UUID_A = "0f8fad5b-d9cb-469f-a165-70867728950e"
UUID_B = "7c9e6679-7425-40de-944b-e07fc1f90ae7"


class TestCleanUuid:
    def test_strips_punctuation_keeps_hyphens(self) -> None:
        assert (
            clean_uuid("uuid:12345678-90ab-cdef-1234-567890abcdef!!")
            == "uuid12345678-90ab-cdef-1234-567890abcdef"
        )

    def test_keeps_commas_and_alnum(self) -> None:
        assert clean_uuid("a,b-C 1\t") == "a,b-C1"

    def test_clean_uuid_is_noop_on_canonical(self) -> None:
        assert clean_uuid(UUID_A) == UUID_A


class TestIsValidUuid:
    def test_valid(self) -> None:
        assert is_valid_uuid(UUID_A) is True
        assert is_valid_uuid(UUID_A.upper()) is True

    def test_invalid(self) -> None:
        assert is_valid_uuid("") is False
        assert is_valid_uuid(UUID_A + "x") is False
        assert is_valid_uuid(UUID_A.replace("-", "")) is False


class TestSplitTags:
    def test_comma_separated(self) -> None:
        assert split_tags(f"Red, {UUID_A},uuid:{UUID_A}\n") == ["Red", UUID_A, f"uuid:{UUID_A}"]

    def test_empty_output(self) -> None:
        assert split_tags("") == []
        assert split_tags("\n") == []


class TestClassifyTags:
    def test_no_tags(self) -> None:
        state = classify_tags([])
        assert state.is_empty
        assert state.duplicates == ()

    def test_non_uuid_tags_are_ignored(self) -> None:
        state = classify_tags(["Red", "work", "uuid:not-a-uuid"])
        assert state.is_empty

    def test_single_and_doi(self) -> None:
        state = classify_tags(["Red", f"uuid:{UUID_A}", UUID_A])
        assert state.single == TagMatch(raw=UUID_A, uuid=UUID_A)
        assert state.doi == TagMatch(raw=f"uuid:{UUID_A}", uuid=UUID_A)
        assert state.is_consistent

    def test_case_insensitive_consistency(self) -> None:
        state = classify_tags([f"UUID:{UUID_A.upper()}", UUID_A])
        assert state.doi is not None
        assert state.doi.uuid == UUID_A.upper()
        assert state.is_consistent

    def test_doi_tag_is_not_a_single_tag(self) -> None:
        state = classify_tags([f"uuid:{UUID_A}"])
        assert state.single is None
        assert state.doi is not None

    def test_trailing_junk_is_cleaned(self) -> None:
        """マッチ後の記号は clean_uuid で取り除かれること."""
        state = classify_tags([f"{UUID_A}!!", f"uuid:{UUID_B}."])
        assert state.single == TagMatch(raw=f"{UUID_A}!!", uuid=UUID_A)
        assert state.doi == TagMatch(raw=f"uuid:{UUID_B}.", uuid=UUID_B)

    def test_malformed_after_cleaning_is_skipped(self) -> None:
        """整形後にUUIDとして不正なタグはスキップし、次の候補を採用すること."""
        with patch("tag_uuid_sync.core.classify.logger.warning") as mock_warning:
            state = classify_tags([f"{UUID_A}abc", UUID_B])

        assert state.single == TagMatch(raw=UUID_B, uuid=UUID_B)
        assert mock_warning.called
        assert "malformed" in mock_warning.call_args_list[0].args[0]

    def test_first_match_wins(self) -> None:
        """同種のタグが複数ある場合、先頭のみを採用し残りは重複として報告すること."""
        with patch("tag_uuid_sync.core.classify.logger.warning") as mock_warning:
            state = classify_tags([UUID_B, f"uuid:{UUID_A}", UUID_A, f"uuid:{UUID_B}"])

        assert state.single is not None and state.single.uuid == UUID_B
        assert state.doi is not None and state.doi.uuid == UUID_A
        assert set(state.duplicates) == {UUID_A, f"uuid:{UUID_B}"}
        assert mock_warning.call_count == 1


def test_doi_tag() -> None:
    assert doi_tag(UUID_A) == f"uuid:{UUID_A}"
