"""
Tests for the artifact service over the JSON document repository.

Tests cover:
- Create / update / delete with upsert-and-prepend semantics
- Spreadsheet-style (prepend) and archive-style (replace) imports
- Full-document sync and the on-disk camelCase format
"""

import json

import pytest

from archaeolog.api.v1.schemas.artifact import ArtifactCreate
from archaeolog.core.models.user import User
from archaeolog.core.repositories.artifact_repository import DocumentStoreError
from archaeolog.core.repositories.implementations.json_file.artifact_repository import (
    JsonDocumentArtifactRepository,
)
from archaeolog.core.services.artifact_service import (
    DEFAULT_ARTIFACT_NAME,
    DEFAULT_SITE_NAME,
    ArtifactService,
    ImportMode,
)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def service(data_file):
    return ArtifactService(JsonDocumentArtifactRepository(data_file))


def _payload(**overrides):
    data = {"siteName": "二里头遗址", "name": "陶爵", "material": "泥质陶"}
    data.update(overrides)
    return ArtifactCreate.model_validate(data)


class TestCrud:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(self, service):
        artifact = await service.create_artifact(_payload())
        assert artifact.id
        assert artifact.created_at > 0
        assert (await service.get_artifact(artifact.id)) == artifact

    @pytest.mark.asyncio
    async def test_new_records_are_prepended(self, service):
        first = await service.create_artifact(_payload(name="一"))
        second = await service.create_artifact(_payload(name="二"))
        assert [a.id for a in await service.list_artifacts()] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_update_keeps_identity_and_position(self, service):
        first = await service.create_artifact(_payload(name="一"))
        await service.create_artifact(_payload(name="二"))
        updated = await service.update_artifact(first.id, _payload(name="一（修）", quantity=3))
        assert updated.id == first.id
        assert updated.created_at == first.created_at
        listed = await service.list_artifacts()
        assert listed[1].name == "一（修）"
        assert listed[1].quantity == 3

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, service):
        assert await service.update_artifact("nope", _payload()) is None

    @pytest.mark.asyncio
    async def test_delete(self, service):
        artifact = await service.create_artifact(_payload())
        assert await service.delete_artifact(artifact.id) is True
        assert await service.delete_artifact(artifact.id) is False
        assert await service.list_artifacts() == []

    def test_blank_names_are_rejected(self):
        with pytest.raises(ValueError):
            _payload(siteName="  ")

    @pytest.mark.asyncio
    async def test_document_uses_camel_case(self, service, data_file):
        await service.create_artifact(_payload(serialNumber="H1:23"))
        raw = json.loads(data_file.read_text(encoding="utf-8"))
        record = raw["artifacts"][0]
        assert record["siteName"] == "二里头遗址"
        assert record["serialNumber"] == "H1:23"
        assert "createdAt" in record
        assert raw["users"] == []


class TestImport:
    @pytest.mark.asyncio
    async def test_prepend_fills_defaults(self, service):
        existing = await service.create_artifact(_payload())
        count = await service.import_artifacts(
            [{"name": "石斧", "quantity": "2"}, {"siteName": "石峁遗址", "quantity": ""}],
            ImportMode.PREPEND,
        )
        assert count == 2
        listed = await service.list_artifacts()
        assert [a.site_name for a in listed] == [DEFAULT_SITE_NAME, "石峁遗址", "二里头遗址"]
        assert listed[1].name == DEFAULT_ARTIFACT_NAME
        assert listed[0].quantity == 2
        assert listed[1].quantity == 1
        assert listed[2].id == existing.id
        assert len({a.id for a in listed}) == 3

    @pytest.mark.asyncio
    async def test_replace_overwrites(self, service):
        await service.create_artifact(_payload())
        archive = [{"id": "x1", "siteName": "殷墟遗址", "name": "卜骨", "createdAt": 5}]
        assert await service.import_artifacts(archive, ImportMode.REPLACE) == 1
        listed = await service.list_artifacts()
        assert [(a.id, a.created_at) for a in listed] == [("x1", 5)]

    @pytest.mark.asyncio
    async def test_export_round_trips_through_replace(self, service):
        await service.create_artifact(_payload(name="一"))
        await service.create_artifact(_payload(name="二"))
        exported = await service.export_artifacts()
        rows = [a.model_dump(mode="json", by_alias=True) for a in exported]
        await service.import_artifacts(rows, ImportMode.REPLACE)
        assert await service.export_artifacts() == exported


class TestSync:
    @pytest.mark.asyncio
    async def test_sync_replaces_only_given_lists(self, service):
        await service.create_artifact(_payload())
        users = [User(username="admin", display_name="管理员")]
        document = await service.sync(users=users, artifacts=None)
        assert [u.username for u in document.users] == ["admin"]
        assert len(document.artifacts) == 1

        document = await service.sync(users=None, artifacts=[])
        assert document.artifacts == []
        assert [u.username for u in (await service.read_data()).users] == ["admin"]

    @pytest.mark.asyncio
    async def test_unknown_record_fields_survive(self, service, data_file):
        data_file.write_text(
            json.dumps({
                "users": [],
                "artifacts": [{"id": "1", "siteName": "s", "name": "n", "createdAt": 1, "legacyTag": "旧藏"}],
            }),
            encoding="utf-8",
        )
        await service.sync(users=[], artifacts=None)
        raw = json.loads(data_file.read_text(encoding="utf-8"))
        assert raw["artifacts"][0]["legacyTag"] == "旧藏"

    @pytest.mark.asyncio
    async def test_unreadable_document_raises(self, service, data_file):
        data_file.write_text("not json", encoding="utf-8")
        with pytest.raises(DocumentStoreError):
            await service.read_data()
