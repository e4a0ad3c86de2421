"""
Tests for the profile and household repositories in both modes.
"""
from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

from petcare.domain.entities.identity import IdentityEntity
from petcare.domain.entities.profile import ProfileEntity, UserRole
from petcare.infrastructure.auth.registration_trigger import RegistrationTrigger
from petcare.infrastructure.database.repositories.household_repository import HouseholdRepository
from petcare.infrastructure.database.repositories.profile_repository import ProfileRepository


def supabase_returning(data=None, error: Exception | None = None) -> Mock:
    client = Mock()
    query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
    if error is not None:
        query.execute = AsyncMock(side_effect=error)
    else:
        query.execute = AsyncMock(return_value=SimpleNamespace(data=data))
    return client


PROFILE_ROW = {
    "id": "u1",
    "email": "u1@example.com",
    "full_name": None,
    "role": "user",
    "household_id": "h1",
    "created_at": "2025-01-02T03:04:05.000000+00:00",
    "updated_at": "2025-01-02T03:04:05Z",
}


class TestProfileRepositorySupabase:
    @pytest.mark.asyncio
    async def test_row_is_mapped(self):
        client = supabase_returning([PROFILE_ROW])
        repo = ProfileRepository(client)

        profile = await repo.get_by_id("u1")

        client.table.assert_called_once_with("profiles")
        client.table.return_value.select.return_value.eq.assert_called_once_with("id", "u1")
        assert profile.id == "u1"
        assert profile.role is UserRole.USER
        assert profile.full_name is None
        assert profile.household_id == "h1"
        assert isinstance(profile.created_at, datetime)
        assert profile.updated_at.tzinfo is not None
        assert profile.display_name == "u1@example.com"

    @pytest.mark.asyncio
    async def test_no_row_is_none(self):
        repo = ProfileRepository(supabase_returning([]))
        assert await repo.get_by_id("ghost") is None

    @pytest.mark.asyncio
    async def test_query_error_raises(self):
        repo = ProfileRepository(supabase_returning(error=ConnectionError("timeout")))
        with pytest.raises(RuntimeError, match="timeout"):
            await repo.get_by_id("u1")

    @pytest.mark.asyncio
    async def test_unknown_role_raises(self):
        repo = ProfileRepository(supabase_returning([{**PROFILE_ROW, "role": "owner"}]))
        with pytest.raises(ValueError):
            await repo.get_by_id("u1")

    def test_save_is_refused(self):
        repo = ProfileRepository(supabase_returning([]))
        with pytest.raises(RuntimeError):
            repo.save(ProfileEntity(id="u1", email="u1@example.com", household_id="h1"))


class TestInMemoryRepositories:
    @pytest.mark.asyncio
    async def test_profile_roundtrip(self):
        repo = ProfileRepository(None)
        assert repo.in_memory
        repo.save(ProfileEntity(id="u1", email="u1@example.com", household_id="h1"))
        assert (await repo.get_by_id("u1")).email == "u1@example.com"
        assert await repo.get_by_id("u2") is None

    @pytest.mark.asyncio
    async def test_household_create_and_get(self):
        repo = HouseholdRepository(None)
        household = repo.create("Doe Household")
        assert (await repo.get_by_id(household.id)).name == "Doe Household"

    @pytest.mark.asyncio
    async def test_household_supabase_lookup(self):
        client = supabase_returning([{"id": "h1", "name": "Home", "created_at": "2025-01-01T00:00:00Z"}])
        household = await HouseholdRepository(client).get_by_id("h1")
        client.table.assert_called_once_with("households")
        assert household.name == "Home"

    @pytest.mark.asyncio
    async def test_registration_trigger_creates_profile_and_household(self):
        profiles = ProfileRepository(None)
        households = HouseholdRepository(None)
        trigger = RegistrationTrigger(profiles=profiles, households=households)

        trigger(IdentityEntity(id="u1", email="jane@example.com", metadata={"full_name": "Jane"}))

        profile = await profiles.get_by_id("u1")
        assert profile.full_name == "Jane"
        assert profile.role is UserRole.ADMIN
        household = await households.get_by_id(profile.household_id)
        assert household.name == "Jane's Household"
