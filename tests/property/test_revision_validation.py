"""
Property-based tests for revision allow-list validation.

Property: only tokens built from the git revision alphabet, without a
leading hyphen, are ever accepted.
"""

import pytest
from hypothesis import given, strategies as st, assume

from ai_codebase_analyzer.errors import InvalidInputError
from ai_codebase_analyzer.git.revision import parse_revision_spec, validate_revision
from ai_codebase_analyzer.models.revision import Range, SingleRevision


SAFE_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789~^./_-"
UNSAFE_CHARACTERS = [";", "|", "&", "$", "`", "(", ")", "<", ">", " ", "\n", "\t", "'", '"', "*", "\\", "{", "}"]

safe_tokens = st.text(alphabet=SAFE_ALPHABET, min_size=1, max_size=40).filter(lambda t: not t.startswith("-"))


class TestRevisionValidation:
    """Property tests for validate_revision and parse_revision_spec."""

    @given(token=safe_tokens)
    def test_safe_tokens_are_accepted(self, token):
        """
        Property: Every token from the allow-list alphabet is accepted.

        Given: A token built only from allowed characters, not starting with '-'
        When: The token is validated
        Then: Validation succeeds
        """
        assert validate_revision(token) is True

    @given(token=st.text(alphabet=SAFE_ALPHABET, max_size=40))
    def test_leading_hyphen_is_rejected(self, token):
        """
        Property: A leading hyphen is never accepted, so tokens cannot become git flags.
        """
        assert validate_revision("-" + token) is False

    @given(
        prefix=st.text(alphabet=SAFE_ALPHABET, max_size=20),
        bad=st.sampled_from(UNSAFE_CHARACTERS),
        suffix=st.text(alphabet=SAFE_ALPHABET, max_size=20),
    )
    def test_metacharacters_are_rejected(self, prefix, bad, suffix):
        """
        Property: Any token containing a shell metacharacter or whitespace is rejected.

        Given: An otherwise safe token with one unsafe character inserted
        When: The token is validated and parsed
        Then: Validation fails and parsing raises InvalidInputError
        """
        token = prefix + bad + suffix
        assert validate_revision(token) is False

        with pytest.raises(InvalidInputError):
            parse_revision_spec(revision=token)

    @given(token=safe_tokens)
    def test_single_token_round_trips(self, token):
        """
        Property: A safe token without '..' parses to a SingleRevision carrying it unchanged.
        """
        assume(".." not in token and token != ".")

        assert parse_revision_spec(revision=token) == SingleRevision(token)

    @given(base=safe_tokens, head=safe_tokens)
    def test_range_splits_on_first_separator(self, base, head):
        """
        Property: 'base..head' splits on the first '..' occurrence.
        """
        assume(".." not in base and not base.endswith("."))

        spec = parse_revision_spec(revision=f"{base}..{head}")

        assert spec == Range(base=base, head=head)
