"""Hero section and presentation page endpoints."""

import json

from tests.conftest import PNG_BYTES, stored_files


def png(name: str):
    return (name, PNG_BYTES, "image/png")


async def test_hero_default_is_created_on_first_read(client):
    first = await client.get("/api/hero")
    second = await client.get("/api/hero")

    assert first.status_code == 200
    assert first.json()["data"]["title"] == "Welcome to LABTIM"
    assert first.json()["data"]["image_url"] is None
    assert second.json()["data"]["id"] == first.json()["data"]["id"]


async def test_first_hero_save_requires_image(client, admin_headers):
    response = await client.put("/api/hero", headers=admin_headers, data={"title": "Hi"})

    assert response.status_code == 400
    assert "image is required" in response.json()["message"]


async def test_hero_update_replaces_and_clears_image(client, admin_headers, storage):
    created = await client.put(
        "/api/hero",
        headers=admin_headers,
        data={"title": "Research", "button_content": "Discover"},
        files={"image": png("hero.png")},
    )
    assert created.status_code == 200
    data = created.json()["data"]
    assert data["title"] == "Research"
    assert data["image_url"].startswith("/uploads/hero_images/hero-")

    replaced = await client.put(
        "/api/hero",
        headers=admin_headers,
        data={"title": "Research"},
        files={"image": png("other.png")},
    )
    files = stored_files(storage)
    assert len(files) == 1 and files[0].startswith("hero_images/other-")
    assert replaced.json()["data"]["button_content"] is None

    cleared = await client.put("/api/hero", headers=admin_headers, data={"image_url": "null"})
    assert cleared.json()["data"]["image_url"] is None
    assert stored_files(storage) == []


async def test_hero_update_requires_admin(client, member_headers):
    response = await client.put("/api/hero", headers=member_headers, data={"title": "x"})
    assert response.status_code == 403


async def test_presentation_default(client):
    response = await client.get("/api/presentation/main")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["section_name"] == "main_presentation"
    assert data["content_blocks"] == []
    assert data["counter1_label"] == "Permanents"


async def test_presentation_update_with_block_images(client, admin_headers, storage):
    blocks = [
        {"id": "b1", "type": "text", "content": "Our lab"},
        {"id": "b2", "type": "image", "url": "blob:http://localhost:3000/abc", "alt_text": "team"},
        {"id": "b3", "type": "image", "url": "blob:http://localhost:3000/def", "width": 300},
    ]

    response = await client.put(
        "/api/presentation/main",
        headers=admin_headers,
        data={
            "content_blocks": json.dumps(blocks),
            "director_name": "Dr. Amel",
            "counter1_value": "12",
            "counter2_label": "",
        },
        files={"image_1": png("team.png"), "director_image": png("director.png")},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    text, uploaded, pending = data["content_blocks"]
    assert text["content"] == "Our lab"
    assert uploaded["url"].startswith("/uploads/presentation_images/team-")
    assert uploaded["alt_text"] == "team"
    assert pending["url"] is None
    assert pending["width"] is None
    assert pending["size_slider_value"] == 50
    assert data["director_image"].startswith("/uploads/presentation_images/director-")
    assert data["counter1_value"] == 12
    assert data["counter2_label"] == "Articles impactés"
    assert len(stored_files(storage)) == 2


async def test_presentation_drops_unreferenced_images(client, admin_headers, storage):
    blocks = [{"id": "b1", "type": "image", "url": ""}]
    first = await client.put(
        "/api/presentation/main",
        headers=admin_headers,
        data={"content_blocks": json.dumps(blocks)},
        files={"image_0": png("first.png")},
    )
    kept_url = first.json()["data"]["content_blocks"][0]["url"]

    # resending the public url keeps the image
    blocks = [{"id": "b1", "type": "image", "url": kept_url}]
    again = await client.put(
        "/api/presentation/main",
        headers=admin_headers,
        data={"content_blocks": json.dumps(blocks)},
    )
    assert again.json()["data"]["content_blocks"][0]["url"] == kept_url
    assert len(stored_files(storage)) == 1

    removed = await client.put(
        "/api/presentation/main",
        headers=admin_headers,
        data={"content_blocks": json.dumps([{"id": "t", "type": "text", "content": "only text"}])},
    )
    assert removed.status_code == 200
    assert stored_files(storage) == []


async def test_presentation_rejects_malformed_blocks(client, admin_headers):
    for raw in ("{oops", json.dumps({"id": "b1"}), json.dumps([{"type": "video", "id": "v"}])):
        response = await client.put(
            "/api/presentation/main", headers=admin_headers, data={"content_blocks": raw}
        )
        assert response.status_code == 400, raw
        assert response.json()["success"] is False


async def test_presentation_never_deletes_other_sections_images(client, admin_headers, storage):
    created = await client.post(
        "/api/carousel",
        headers=admin_headers,
        data={"order": "1", "title": "shared"},
        files={"image": png("slide.png")},
    )
    carousel_url = created.json()["data"]["image_url"]

    blocks = [{"id": "b1", "type": "image", "url": carousel_url}]
    linked = await client.put(
        "/api/presentation/main",
        headers=admin_headers,
        data={"content_blocks": json.dumps(blocks), "director_image": carousel_url},
    )
    assert linked.json()["data"]["content_blocks"][0]["url"] == carousel_url

    cleared = await client.put(
        "/api/presentation/main",
        headers=admin_headers,
        data={"content_blocks": "[]", "director_image": "null"},
    )

    assert cleared.status_code == 200
    assert stored_files(storage) == [carousel_url.removeprefix("/uploads/")]
    listing = (await client.get("/api/carousel")).json()["data"]
    assert listing[0]["image_url"] == carousel_url
    assert (await client.get(carousel_url)).status_code == 200
