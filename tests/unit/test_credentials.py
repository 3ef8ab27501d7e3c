"""
Tests for credential types.

Date: 2026-10-18
"""

import pytest

from azopenai.client.credentials import AccessToken, KeyCredential, TokenCredential


class TestKeyCredential:
    """Test static keys."""

    def test_key(self):
        assert KeyCredential("abc").key == "abc"

    def test_update(self):
        credential = KeyCredential("abc")
        credential.update("def")
        assert credential.key == "def"

    @pytest.mark.parametrize("bad", ["", None])
    def test_empty_key_rejected(self, bad):
        with pytest.raises(ValueError):
            KeyCredential(bad)

    def test_empty_update_rejected(self):
        credential = KeyCredential("abc")
        with pytest.raises(ValueError):
            credential.update("")
        assert credential.key == "abc"

    def test_repr_hides_key(self):
        assert "abc" not in repr(KeyCredential("abc"))


class TestTokenCredential:
    """Test the token credential protocol."""

    def test_structural_match(self, token_credential):
        assert isinstance(token_credential, TokenCredential)

    def test_key_credential_is_not_token_credential(self):
        assert not isinstance(KeyCredential("abc"), TokenCredential)

    @pytest.mark.asyncio
    async def test_tokens(self, token_credential):
        token = await token_credential.get_token("scope")
        assert isinstance(token, AccessToken)
        assert token.token == "token-1"
