"""
API tests through FastAPI's TestClient with storage in a temp directory.
"""

import json

from archaeolog.config import settings

PREFIX = settings.api_prefix


def _create(client, **overrides):
    payload = {"siteName": "二里头遗址", "name": "陶爵", "material": "泥质陶"}
    payload.update(overrides)
    resp = client.post(f"{PREFIX}/artifacts/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestHealth:
    def test_health(self, client):
        resp = client.get(f"{PREFIX}/health/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"
        assert resp.headers["X-Content-Type-Options"] == "nosniff"

    def test_ready(self, client, data_root):
        resp = client.get(f"{PREFIX}/health/ready")
        assert resp.json()["storage"] == "connected"
        assert (data_root / "db.json").exists()
        assert (data_root / "uploads").is_dir()


class TestArtifactsApi:
    def test_crud(self, client):
        created = _create(client, serialNumber="H1:23")
        assert created["siteName"] == "二里头遗址"
        artifact_id = created["id"]

        assert client.get(f"{PREFIX}/artifacts/{artifact_id}").json()["serialNumber"] == "H1:23"

        updated = client.put(
            f"{PREFIX}/artifacts/{artifact_id}",
            json={"siteName": "二里头遗址", "name": "铜爵", "material": "青铜"},
        )
        assert updated.status_code == 200
        assert updated.json()["name"] == "铜爵"
        assert updated.json()["createdAt"] == created["createdAt"]

        assert client.delete(f"{PREFIX}/artifacts/{artifact_id}").status_code == 204
        assert client.get(f"{PREFIX}/artifacts/{artifact_id}").status_code == 404
        assert client.delete(f"{PREFIX}/artifacts/{artifact_id}").status_code == 404

    def test_missing_names_rejected(self, client):
        resp = client.post(f"{PREFIX}/artifacts/", json={"siteName": " ", "name": "陶爵"})
        assert resp.status_code == 422

    def test_filtered_list(self, client):
        _create(client, name="陶罐", siteName="殷墟遗址")
        _create(client, name="玉璧", siteName="良渚古城遗址")
        names = [a["name"] for a in client.get(f"{PREFIX}/artifacts/", params={"search": "玉"}).json()]
        assert names == ["玉璧"]
        by_site = client.get(f"{PREFIX}/artifacts/", params={"site": "殷墟遗址"}).json()
        assert [a["name"] for a in by_site] == ["陶罐"]

    def test_import_and_export(self, client):
        _create(client)
        resp = client.post(
            f"{PREFIX}/artifacts/import",
            json={"mode": "prepend", "artifacts": [{"name": "石斧"}]},
        )
        assert resp.json() == {"imported": 1}
        exported = client.get(f"{PREFIX}/artifacts/export").json()
        assert [a["name"] for a in exported] == ["石斧", "陶爵"]

        resp = client.post(f"{PREFIX}/artifacts/import", json={"mode": "replace", "artifacts": exported[:1]})
        assert resp.json() == {"imported": 1}
        assert len(client.get(f"{PREFIX}/artifacts/").json()) == 1

    def test_invalid_replace_import(self, client):
        resp = client.post(f"{PREFIX}/artifacts/import", json={"mode": "replace", "artifacts": [{"name": "x"}]})
        assert resp.status_code == 400


class TestSitesAndStats:
    def test_sites(self, client):
        _create(client, siteName="殷墟遗址")
        _create(client, siteName="殷墟遗址")
        groups = client.get(f"{PREFIX}/sites/").json()
        assert groups[0]["name"] == "殷墟遗址"
        assert groups[0]["count"] == 2

    def test_stats(self, client):
        _create(client, material="青铜")
        _create(client, material="青铜", quantity=4)
        _create(client, material="玉")
        assert client.get(f"{PREFIX}/stats/material").json() == [
            {"label": "青铜", "value": 2},
            {"label": "玉", "value": 1},
        ]
        summary = client.get(f"{PREFIX}/stats/summary").json()
        assert summary == {"artifact_count": 3, "site_count": 1, "total_quantity": 6}

    def test_unknown_dimension(self, client):
        assert client.get(f"{PREFIX}/stats/colour").status_code == 422


class TestVocabularyApi:
    def test_fields(self, client):
        assert "siteName" in client.get(f"{PREFIX}/vocabulary/fields").json()

    def test_empty_vocabulary(self, client):
        view = client.get(f"{PREFIX}/vocabulary/material").json()
        assert view["options"] == []
        assert view["can_reorder"] is True

    def test_frequencies_from_records(self, client):
        _create(client, material="青铜")
        _create(client, material="玉")
        _create(client, material="青铜")
        assert client.get(f"{PREFIX}/vocabulary/material").json()["options"] == ["青铜", "玉"]

    def test_add_reorder_remove(self, client):
        _create(client, material="青铜")
        view = client.post(f"{PREFIX}/vocabulary/material/options", json={"value": "绿松石"}).json()
        assert view["options"] == ["绿松石", "青铜"]

        view = client.put(f"{PREFIX}/vocabulary/material/order", json={"sequence": ["青铜", "绿松石"]}).json()
        assert view["options"] == ["青铜", "绿松石"]

        view = client.delete(f"{PREFIX}/vocabulary/material/options", params={"value": "绿松石"}).json()
        assert view["options"] == ["青铜"]

    def test_remove_trims_value(self, client):
        client.post(f"{PREFIX}/vocabulary/material/options", json={"value": " 玉 "})
        view = client.delete(f"{PREFIX}/vocabulary/material/options", params={"value": " 玉 "}).json()
        assert view["options"] == []

    def test_query_view(self, client):
        client.post(f"{PREFIX}/vocabulary/category/options", json={"value": "amphora"})
        client.post(f"{PREFIX}/vocabulary/category/options", json={"value": "bone"})
        view = client.get(f"{PREFIX}/vocabulary/category", params={"q": "am"}).json()
        assert view["options"] == ["amphora"]
        assert view["can_add"] is True
        assert view["can_reorder"] is False

        view = client.get(f"{PREFIX}/vocabulary/category", params={"q": "bone"}).json()
        assert view["options"] == ["bone", "amphora"]
        assert view["can_add"] is False

    def test_state_persisted_to_file(self, client, data_root):
        client.post(f"{PREFIX}/vocabulary/siteName/options", json={"value": "石峁遗址"})
        stored = json.loads((data_root / "vocabulary.json").read_text(encoding="utf-8"))
        assert json.loads(stored["custom_order_siteName"]) == ["石峁遗址"]


class TestDataApi:
    def test_read_and_sync(self, client):
        _create(client)
        assert len(client.get(f"{PREFIX}/data").json()["artifacts"]) == 1

        resp = client.post(f"{PREFIX}/sync", json={"users": [{"username": "admin", "displayName": "管理员"}]})
        assert resp.json() == {"success": True, "users": 1, "artifacts": 1}

        resp = client.post(f"{PREFIX}/sync", json={"artifacts": []})
        assert resp.json() == {"success": True, "users": 1, "artifacts": 0}
        assert client.get(f"{PREFIX}/data").json()["users"][0]["displayName"] == "管理员"

    def test_corrupt_document_is_server_error(self, client, data_root):
        (data_root / "db.json").write_text("[", encoding="utf-8")
        resp = client.get(f"{PREFIX}/data")
        assert resp.status_code == 500

    def test_upload(self, client, data_root):
        resp = client.post(f"{PREFIX}/upload", files={"file": ("正视图.JPG", b"\xff\xd8fake", "image/jpeg")})
        assert resp.status_code == 200
        body = resp.json()
        assert body["filename"].endswith(".jpg")
        assert body["url"] == f"/uploads/{body['filename']}"
        assert (data_root / "uploads" / body["filename"]).read_bytes() == b"\xff\xd8fake"

        served = client.get(body["url"])
        assert served.status_code == 200
        assert served.content == b"\xff\xd8fake"

    def test_upload_requires_file(self, client):
        assert client.post(f"{PREFIX}/upload").status_code == 400

    def test_upload_size_limit(self, client, data_root, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_bytes", 4)
        resp = client.post(f"{PREFIX}/upload", files={"file": ("a.png", b"123456", "image/png")})
        assert resp.status_code == 413
        assert list((data_root / "uploads").iterdir()) == []
