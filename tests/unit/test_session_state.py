import pytest

from petcare.domain.entities.identity import IdentityEntity
from petcare.domain.entities.profile import ProfileEntity
from petcare.domain.entities.session_state import SessionState
from petcare.domain.results import FailureKind, Result


def test_profile_requires_identity():
    profile = ProfileEntity(id="u1", email="u1@example.com", household_id="h1")
    with pytest.raises(ValueError):
        SessionState(identity=None, profile=profile, loading=False)


def test_identity_without_profile_is_valid():
    state = SessionState(identity=IdentityEntity(id="u1"), profile=None, loading=False)
    assert state.authenticated


def test_loading_state_is_not_authenticated():
    state = SessionState(identity=IdentityEntity(id="u1"), loading=True)
    assert not state.authenticated


def test_identity_full_name_from_metadata():
    assert IdentityEntity(id="u1", metadata={"full_name": "Jane"}).full_name == "Jane"
    assert IdentityEntity(id="u1", metadata={"full_name": ""}).full_name is None


def test_result_constructors():
    ok = Result.success(5)
    assert ok.ok and ok.value == 5
    bad = Result.fail(FailureKind.AUTH_REJECTED, "nope", detail="401")
    assert not bad.ok
    assert bad.failure.message == "nope"
    assert bad.failure.detail == "401"
