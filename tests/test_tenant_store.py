# tests/test_tenant_store.py
"""Tests for the tenant store lifecycle: capacity, identity, replacement, selection, persistence."""

import json

import pytest

from tenant_console.activity.log import ActivityLevel
from tenant_console.storage.memory_blob_store import InMemoryBlobStore
from tenant_console.tenants.errors import CapacityExceededError, PersistenceError
from tenant_console.tenants.models import TenantContent, ThemeVariant, seed_collection
from tenant_console.tenants.persistence import BlobTenantPersistence
from tenant_console.tenants.service import TenantStore, merge_generated_content

from .conftest import STORAGE_KEY


async def _stored_ids(blob_store):
    return [t["id"] for t in json.loads(await blob_store.get(STORAGE_KEY))]


class TestCreate:
    @pytest.mark.asyncio
    async def test_first_creates_follow_project_numbering(self, store):
        first = await store.create()
        second = await store.create()

        assert first.name == "Project 1"
        assert first.theme == ThemeVariant.MODERN
        assert first.content == TenantContent(hero_title="", hero_subtitle="", about_section="")
        assert second.name == "Project 2"

    @pytest.mark.asyncio
    async def test_create_selects_and_persists(self, store, blob_store):
        created = await store.create()

        assert store.selected_id == created.id
        assert await _stored_ids(blob_store) == [created.id]

    @pytest.mark.asyncio
    async def test_fifth_create_fails_and_changes_nothing(self, store, blob_store, activity_log):
        for _ in range(4):
            await store.create()
        before = store.list_tenants()
        selected_before = store.selected_id
        writes_before = blob_store.put_calls

        with pytest.raises(CapacityExceededError) as exc_info:
            await store.create()

        assert exc_info.value.status_code == 409
        assert store.list_tenants() == before
        assert len(store.list_tenants()) == 4
        assert store.selected_id == selected_before
        assert blob_store.put_calls == writes_before
        assert activity_log.entries()[-1].level == ActivityLevel.WARN
        assert "License Limit Reached" in activity_log.entries()[-1].message

    @pytest.mark.asyncio
    async def test_slot_usage(self, store):
        await store.create()

        usage = store.slot_usage()

        assert (usage.used, usage.capacity, usage.remaining) == (1, 4, 3)


class TestIdentity:
    @pytest.mark.asyncio
    async def test_ids_are_unique_and_never_reused_after_delete(self, store):
        issued = []
        for _ in range(4):
            issued.append((await store.create()).id)
        await store.delete(issued[0])
        await store.delete(issued[2])
        for _ in range(2):
            issued.append((await store.create()).id)

        live_ids = [t.id for t in store.list_tenants()]
        assert len(set(live_ids)) == len(live_ids) == 4
        assert len(set(issued)) == len(issued) == 6

    @pytest.mark.asyncio
    async def test_loaded_ids_are_reserved(self, activity_log):
        persistence = BlobTenantPersistence(InMemoryBlobStore(), STORAGE_KEY)
        store = TenantStore(persistence, activity_log)
        await store.initialize()

        created = await store.create()

        assert created.id != "T-001"
        assert [t.id for t in store.list_tenants()] == ["T-001", created.id]
        assert created.name == "Project 2"

    @pytest.mark.asyncio
    async def test_saved_collection_with_repeated_id_loads_unique(self, activity_log):
        seed = seed_collection()[0].model_dump(mode="json", by_alias=True)
        blob_store = InMemoryBlobStore({STORAGE_KEY: json.dumps([seed, seed])})
        store = TenantStore(BlobTenantPersistence(blob_store, STORAGE_KEY), activity_log)
        await store.initialize()

        ids = [t.id for t in store.list_tenants()]
        assert ids == ["T-001"]
        assert await store.delete("T-001") is True
        assert store.get_tenant("T-001") is None

    @pytest.mark.asyncio
    async def test_over_capacity_collection_loads_with_warning(self, activity_log):
        tenants = [
            seed_collection()[0].model_copy(update={"id": f"T-{n:03d}", "subdomain": f"shop{n}"})
            for n in range(1, 6)
        ]
        blob = json.dumps([t.model_dump(mode="json", by_alias=True) for t in tenants])
        store = TenantStore(
            BlobTenantPersistence(InMemoryBlobStore({STORAGE_KEY: blob}), STORAGE_KEY),
            activity_log,
            capacity=4,
        )
        await store.initialize()

        assert len(store.list_tenants()) == 5
        assert store.slot_usage().remaining == 0
        warnings = activity_log.entries(ActivityLevel.WARN)
        assert any("over the license limit of 4" in e.message for e in warnings)
        with pytest.raises(CapacityExceededError):
            await store.create()


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_replaces_whole_record(self, store, blob_store):
        original = await store.create()
        replacement = original.model_copy(
            update={
                "name": "Renamed",
                "subdomain": "renamed",
                "theme": ThemeVariant.TECH,
                "content": TenantContent(hero_title="Only title"),
            }
        )

        result = await store.update(replacement)

        assert result == replacement
        assert store.get_tenant(original.id) == replacement
        stored = json.loads(await blob_store.get(STORAGE_KEY))[0]
        assert stored["name"] == "Renamed"
        assert stored["content"] == {"heroTitle": "Only title", "heroSubtitle": "", "aboutSection": ""}

    @pytest.mark.asyncio
    async def test_update_preserves_order(self, store):
        ids = [(await store.create()).id for _ in range(3)]
        middle = store.get_tenant(ids[1]).model_copy(update={"name": "Middle"})

        await store.update(middle)

        assert [t.id for t in store.list_tenants()] == ids

    @pytest.mark.asyncio
    async def test_update_unknown_id_returns_none_and_logs(self, store, blob_store, activity_log):
        created = await store.create()
        writes_before = blob_store.put_calls
        ghost = created.model_copy(update={"id": "T-MISSING"})

        assert await store.update(ghost) is None
        assert blob_store.put_calls == writes_before
        assert activity_log.entries()[-1].level == ActivityLevel.WARN
        assert "T-MISSING" in activity_log.entries()[-1].message

    @pytest.mark.asyncio
    async def test_subdomain_collision_is_allowed_but_logged(self, store, activity_log):
        first = await store.create()
        second = await store.create()

        result = await store.update(second.model_copy(update={"subdomain": first.subdomain}))

        assert result.subdomain == first.subdomain
        assert any(
            e.level == ActivityLevel.WARN and first.id in e.message for e in activity_log.entries()
        )

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, store):
        created = await store.create()
        created.name = "mutated outside the store"

        assert store.get_tenant(created.id).name == "Project 1"


class TestDeleteAndSelection:
    @pytest.mark.asyncio
    async def test_deleting_selected_tenant_clears_selection(self, store, activity_log):
        created = await store.create()
        store.select(created.id)

        assert await store.delete(created.id) is True
        assert store.selected_id is None
        assert store.selected_tenant() is None
        assert activity_log.entries()[-1].level == ActivityLevel.WARN

    @pytest.mark.asyncio
    async def test_deleting_other_tenant_keeps_selection(self, store):
        first = await store.create()
        second = await store.create()
        store.select(first.id)

        await store.delete(second.id)

        assert store.selected_id == first.id

    @pytest.mark.asyncio
    async def test_delete_unknown_id_returns_false(self, store, blob_store):
        writes_before = blob_store.put_calls

        assert await store.delete("T-NOPE") is False
        assert blob_store.put_calls == writes_before

    @pytest.mark.asyncio
    async def test_select_tolerates_absent_id(self, store):
        store.select("T-GHOST")

        assert store.selected_id == "T-GHOST"
        assert store.selected_tenant() is None

        store.select(None)
        assert store.selected_id is None


class TestPersistenceFailure:
    @pytest.mark.asyncio
    async def test_failed_save_keeps_mutation_and_flush_retries(self, store, blob_store, activity_log):
        blob_store.fail_writes = True

        with pytest.raises(PersistenceError):
            await store.create()

        assert len(store.list_tenants()) == 1
        assert store.is_dirty
        assert activity_log.entries()[-1].level == ActivityLevel.ERROR
        assert await _stored_ids(blob_store) == []

        blob_store.fail_writes = False
        await store.flush()

        assert not store.is_dirty
        assert await _stored_ids(blob_store) == [store.list_tenants()[0].id]

    @pytest.mark.asyncio
    async def test_next_mutation_writes_pending_changes(self, store, blob_store):
        blob_store.fail_writes = True
        with pytest.raises(PersistenceError):
            await store.create()
        blob_store.fail_writes = False

        second = await store.create()

        assert len(await _stored_ids(blob_store)) == 2
        assert second.id in await _stored_ids(blob_store)
        assert not store.is_dirty


class TestGeneratedContentMerge:
    @pytest.mark.asyncio
    async def test_apply_generated_content(self, store):
        created = await store.create()

        updated = await store.apply_generated_content(
            created.id,
            "#D2691E",
            TenantContent(hero_title="Title", hero_subtitle="Sub", about_section="About"),
        )

        assert updated.primary_color == "#D2691E"
        assert updated.content == TenantContent(hero_title="Title", hero_subtitle="Sub", about_section="About")
        assert store.get_tenant(created.id) == updated

    @pytest.mark.asyncio
    async def test_apply_to_unknown_tenant_returns_none(self, store):
        assert await store.apply_generated_content("T-NOPE", "#000000", TenantContent()) is None

    def test_blank_generated_values_keep_current_ones(self):
        from tenant_console.tenants.models import seed_collection
        tenant = seed_collection()[0]

        merged = merge_generated_content(
            tenant, "", TenantContent(hero_title="New title", hero_subtitle="  ", about_section="")
        )

        assert merged.primary_color == tenant.primary_color
        assert merged.content.hero_title == "New title"
        assert merged.content.hero_subtitle == tenant.content.hero_subtitle
        assert merged.content.about_section == tenant.content.about_section
        assert merged.id == tenant.id
