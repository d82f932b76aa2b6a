"""
Unit tests for user_auth
Testing caller identity resolution from API Gateway authorizer claims
"""

import json
import os

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")

import pytest  # noqa: E402
from user_auth import (  # noqa: E402
    UnauthenticatedError,
    extract_user_context,
    is_resource_owner,
    resolve_caller_id,
)


def _event(claims):
    return {"requestContext": {"authorizer": {"claims": claims}}}


class TestExtractUserContext:
    """Tests for extract_user_context"""

    def test_dict_claims(self):
        """Claims provided as a dict are read directly"""
        context = extract_user_context(
            _event({"sub": "user-1", "cognito:username": "alice"})
        )
        assert context == {"user_id": "user-1", "username": "alice"}

    def test_json_string_claims(self):
        """Claims provided as a JSON string are decoded"""
        context = extract_user_context(_event(json.dumps({"sub": "user-2"})))
        assert context["user_id"] == "user-2"
        assert context["username"] is None

    def test_malformed_json_claims(self):
        """Unparseable claims yield no identity instead of raising"""
        assert extract_user_context(_event("{oops"))["user_id"] is None

    @pytest.mark.parametrize(
        "event",
        [
            {},
            {"requestContext": None},
            {"requestContext": {}},
            {"requestContext": {"authorizer": "nope"}},
            {"requestContext": {"authorizer": {"claims": 42}}},
            None,
        ],
    )
    def test_missing_pieces(self, event):
        """Any missing level of the event yields no identity"""
        assert extract_user_context(event) == {"user_id": None, "username": None}


class TestResolveCallerId:
    """Tests for resolve_caller_id"""

    def test_returns_sub(self):
        assert resolve_caller_id(_event({"sub": "user-1"})) == "user-1"

    @pytest.mark.parametrize("claims", [{}, {"sub": ""}, {"sub": "   "}])
    def test_no_usable_identity(self, claims):
        """Empty or blank subjects are unauthenticated"""
        with pytest.raises(UnauthenticatedError) as exc_info:
            resolve_caller_id(_event(claims))

        assert exc_info.value.status_code == 401
        assert exc_info.value.error_code == "Unauthenticated"

    def test_no_authorizer(self):
        with pytest.raises(UnauthenticatedError):
            resolve_caller_id({"requestContext": {}})


class TestIsResourceOwner:
    """Tests for is_resource_owner"""

    def test_owner(self):
        assert is_resource_owner("user-1", "user-1") is True

    def test_other_user(self):
        assert is_resource_owner("user-1", "user-2") is False

    def test_empty_ids_never_match(self):
        assert is_resource_owner("", "") is False
        assert is_resource_owner("user-1", None) is False
