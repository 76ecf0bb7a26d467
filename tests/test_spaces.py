import pytest

from caterhub.core.config import settings
from caterhub.core.constants import MAX_IMAGE_BYTES
from caterhub.utils import spaces

JPEG = b"\xff\xd8\xff\xe0fake-jpeg"


@pytest.fixture
def configured_spaces(monkeypatch):
    """Spaces settings filled in and the S3 call replaced; returns the uploaded keys."""
    monkeypatch.setattr(settings, "do_spaces_key", "key")
    monkeypatch.setattr(settings, "do_spaces_secret", "secret")
    monkeypatch.setattr(settings, "do_spaces_bucket", "caterhub")
    monkeypatch.setattr(settings, "do_spaces_endpoint", "https://nyc3.digitaloceanspaces.com")
    monkeypatch.setattr(settings, "do_spaces_cdn_base", "https://cdn.example.com/")
    monkeypatch.setattr(settings, "do_spaces_prefix", "test")

    uploaded = []

    async def fake_put(*, key, body, content_type):
        uploaded.append((key, body, content_type))
        return key

    monkeypatch.setattr(spaces, "put_public_object", fake_put)
    return uploaded


@pytest.fixture
def unconfigured_spaces(monkeypatch):
    monkeypatch.setattr(settings, "do_spaces_key", None)


class TestValidateImage:

    def test_accepts_image(self):
        assert spaces.validate_image("Dal.JPG", "image/jpeg", 1024) == ".jpg"

    def test_rejects_non_image_content_type(self):
        with pytest.raises(ValueError, match="image file"):
            spaces.validate_image("menu.pdf", "application/pdf", 1024)

    def test_rejects_bad_extension(self):
        with pytest.raises(ValueError, match="Invalid image type"):
            spaces.validate_image("dal.gif", "image/gif", 1024)

    def test_size_limit(self):
        assert spaces.validate_image("dal.png", "image/png", MAX_IMAGE_BYTES) == ".png"
        with pytest.raises(ValueError, match="5 MB"):
            spaces.validate_image("dal.png", "image/png", MAX_IMAGE_BYTES + 1)

    def test_rejects_empty_file(self):
        with pytest.raises(ValueError, match="empty"):
            spaces.validate_image("dal.png", "image/png", 0)


class TestUploadPhoto:

    async def test_upload_returns_public_url(self, configured_spaces):
        url = await spaces.upload_menu_item_photo("item-1", "dal.webp", "image/webp", JPEG)

        key, body, content_type = configured_spaces[0]
        assert key.startswith("test/menu-items/item-1/")
        assert key.endswith(".webp")
        assert body == JPEG
        assert content_type == "image/webp"
        assert url == f"https://cdn.example.com/{key}"

    async def test_invalid_image_is_not_uploaded(self, configured_spaces):
        with pytest.raises(ValueError):
            await spaces.upload_menu_item_photo("item-1", "notes.txt", "text/plain", b"hello")
        assert configured_spaces == []

    async def test_unconfigured_storage(self, unconfigured_spaces):
        with pytest.raises(RuntimeError):
            await spaces.upload_menu_item_photo("item-1", "dal.jpg", "image/jpeg", JPEG)


class TestImageRoute:

    async def test_upload_sets_image_url(self, client, menu, configured_spaces):
        item_id = menu["item_a"].id
        resp = await client.post(
            f"/admin/menu-items/{item_id}/image",
            files={"photo": ("dal.jpg", JPEG, "image/jpeg")},
        )

        assert resp.status_code == 200, resp.text
        assert resp.json()["image_url"].startswith(f"https://cdn.example.com/test/menu-items/{item_id}/")

    async def test_storage_not_configured(self, client, menu, unconfigured_spaces):
        resp = await client.post(
            f"/admin/menu-items/{menu['item_a'].id}/image",
            files={"photo": ("dal.jpg", JPEG, "image/jpeg")},
        )
        assert resp.status_code == 503

    async def test_rejects_non_image(self, client, menu):
        resp = await client.post(
            f"/admin/menu-items/{menu['item_a'].id}/image",
            files={"photo": ("menu.pdf", b"%PDF-1.4", "application/pdf")},
        )
        assert resp.status_code == 400

    async def test_missing_item(self, client):
        resp = await client.post(
            "/admin/menu-items/nope/image",
            files={"photo": ("dal.jpg", JPEG, "image/jpeg")},
        )
        assert resp.status_code == 404
