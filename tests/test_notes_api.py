"""
Noteful API: Note Endpoint Tests
================================

What:  End-to-end tests of /api/notes: hydration through the real joins,
       filters, tag replacement, cascades and transactional updates.
How:   SQLite-backed test_client; folders and tags are created through their
       own endpoints first.
"""

import pytest


async def make_folder(client, name):
    response = await client.post("/api/folders", json={"name": name})
    return response.json()["id"]


async def make_tag(client, name):
    response = await client.post("/api/tags", json={"name": name})
    return response.json()["id"]


async def make_note(client, **body):
    response = await client.post("/api/notes", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def tag_ids(note):
    return sorted(tag["id"] for tag in note["tags"])


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_create_with_tags_then_get(self, test_client):
        first = await make_tag(test_client, "work")
        second = await make_tag(test_client, "urgent")

        response = await test_client.post(
            "/api/notes", json={"title": "A", "tags": [first, second]}
        )

        assert response.status_code == 201
        created = response.json()
        assert response.headers["location"].endswith(f"/api/notes/{created['id']}")

        fetched = (await test_client.get(f"/api/notes/{created['id']}")).json()
        assert fetched["title"] == "A"
        assert fetched["folderId"] is None
        assert fetched["folderName"] is None
        assert tag_ids(fetched) == sorted([first, second])
        assert {tag["name"] for tag in fetched["tags"]} == {"work", "urgent"}
        assert fetched == created

    @pytest.mark.asyncio
    async def test_create_in_folder(self, test_client):
        folder_id = await make_folder(test_client, "Inbox")

        note = await make_note(test_client, title="Filed", content="body", folderId=folder_id)

        assert note["folderId"] == folder_id
        assert note["folderName"] == "Inbox"
        assert note["content"] == "body"
        assert note["tags"] == []

    @pytest.mark.asyncio
    async def test_create_without_title_is_400(self, test_client):
        response = await test_client.post("/api/notes", json={"content": "no title", "tags": []})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `title` in request body"
        listing = await test_client.get("/api/notes")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_create_with_unknown_tag_is_400_and_nothing_is_stored(self, test_client):
        response = await test_client.post("/api/notes", json={"title": "Orphan", "tags": [999]})

        assert response.status_code == 400
        listing = await test_client.get("/api/notes")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_duplicate_tag_ids_in_body_are_stored_once(self, test_client):
        tag = await make_tag(test_client, "dup")

        note = await make_note(test_client, title="Twice", tags=[tag, tag])

        assert tag_ids(note) == [tag]


class TestReadNotes:

    @pytest.mark.asyncio
    async def test_get_missing_is_404(self, test_client):
        response = await test_client.get("/api/notes/999")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_is_hydrated_and_ordered_by_id(self, test_client):
        work = await make_tag(test_client, "work")
        home = await make_tag(test_client, "home")
        first = await make_note(test_client, title="First", tags=[work, home])
        second = await make_note(test_client, title="Second")

        notes = (await test_client.get("/api/notes")).json()

        assert [note["id"] for note in notes] == [first["id"], second["id"]]
        assert tag_ids(notes[0]) == sorted([work, home])
        assert notes[1]["tags"] == []

    @pytest.mark.asyncio
    async def test_search_term_matches_title_substring(self, test_client):
        await make_note(test_client, title="foo fighters")
        await make_note(test_client, title="the food list")
        await make_note(test_client, title="bar")

        notes = (await test_client.get("/api/notes", params={"searchTerm": "foo"})).json()

        assert sorted(note["title"] for note in notes) == ["foo fighters", "the food list"]

    @pytest.mark.asyncio
    async def test_search_term_wildcards_are_literal(self, test_client):
        await make_note(test_client, title="100% done")
        await make_note(test_client, title="1000 things")

        notes = (await test_client.get("/api/notes", params={"searchTerm": "0%"})).json()

        assert [note["title"] for note in notes] == ["100% done"]

    @pytest.mark.asyncio
    async def test_search_and_folder_filters_combine(self, test_client):
        inbox = await make_folder(test_client, "Inbox")
        archive = await make_folder(test_client, "Archive")
        await make_note(test_client, title="foo in inbox", folderId=inbox)
        await make_note(test_client, title="foo in archive", folderId=archive)
        await make_note(test_client, title="bar in inbox", folderId=inbox)

        notes = (
            await test_client.get("/api/notes", params={"searchTerm": "foo", "folderId": inbox})
        ).json()

        assert [note["title"] for note in notes] == ["foo in inbox"]
        assert notes[0]["folderName"] == "Inbox"

    @pytest.mark.asyncio
    async def test_tag_filter_keeps_only_the_matching_tag(self, test_client):
        work = await make_tag(test_client, "work")
        home = await make_tag(test_client, "home")
        both = await make_note(test_client, title="both", tags=[work, home])
        await make_note(test_client, title="home only", tags=[home])
        await make_note(test_client, title="untagged")

        notes = (await test_client.get("/api/notes", params={"tagId": work})).json()

        assert [note["id"] for note in notes] == [both["id"]]
        assert notes[0]["tags"] == [{"id": work, "name": "work"}]

    @pytest.mark.asyncio
    async def test_tag_filter_does_not_change_detail_view(self, test_client):
        work = await make_tag(test_client, "work")
        home = await make_tag(test_client, "home")
        note = await make_note(test_client, title="both", tags=[work, home])

        await test_client.get("/api/notes", params={"tagId": home})
        fetched = (await test_client.get(f"/api/notes/{note['id']}")).json()

        assert tag_ids(fetched) == sorted([work, home])

    @pytest.mark.asyncio
    async def test_unknown_folder_filter_is_empty(self, test_client):
        await make_note(test_client, title="anything")

        notes = (await test_client.get("/api/notes", params={"folderId": 12345})).json()

        assert notes == []


class TestUpdateNote:

    @pytest.mark.asyncio
    async def test_update_with_empty_tags_clears_them(self, test_client):
        tag = await make_tag(test_client, "old")
        note = await make_note(test_client, title="A", tags=[tag])

        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"title": "B", "tags": []}
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["title"] == "B"
        assert updated["tags"] == []

    @pytest.mark.asyncio
    async def test_update_replaces_tag_set(self, test_client):
        old = await make_tag(test_client, "old")
        new = await make_tag(test_client, "new")
        note = await make_note(test_client, title="A", tags=[old])

        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"title": "A", "tags": [new]}
        )

        assert tag_ids(response.json()) == [new]

    @pytest.mark.asyncio
    async def test_update_moves_note_between_folders(self, test_client):
        inbox = await make_folder(test_client, "Inbox")
        archive = await make_folder(test_client, "Archive")
        note = await make_note(test_client, title="Move me", content="text", folderId=inbox)

        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"title": "Move me", "folderId": archive}
        )

        moved = response.json()
        assert moved["folderId"] == archive
        assert moved["folderName"] == "Archive"
        assert moved["content"] == "text"

    @pytest.mark.asyncio
    async def test_update_without_title_is_400(self, test_client):
        note = await make_note(test_client, title="Keep")

        response = await test_client.put(f"/api/notes/{note['id']}", json={"content": "x"})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `title` in request body"

    @pytest.mark.asyncio
    async def test_update_missing_is_404(self, test_client):
        response = await test_client.put("/api/notes/999", json={"title": "Ghost", "tags": []})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_failed_update_rolls_back_every_step(self, test_client):
        tag = await make_tag(test_client, "keep")
        note = await make_note(test_client, title="Original", tags=[tag])

        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"title": "Changed", "tags": [tag, 999]}
        )

        assert response.status_code == 400
        fetched = (await test_client.get(f"/api/notes/{note['id']}")).json()
        assert fetched["title"] == "Original"
        assert tag_ids(fetched) == [tag]


class TestDeleteNote:

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, test_client):
        note = await make_note(test_client, title="Bye")

        first = await test_client.delete(f"/api/notes/{note['id']}")
        second = await test_client.delete(f"/api/notes/{note['id']}")

        assert first.status_code == 204
        assert second.status_code == 204
        assert (await test_client.get(f"/api/notes/{note['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_deleting_note_keeps_its_tags(self, test_client):
        tag = await make_tag(test_client, "survivor")
        note = await make_note(test_client, title="Bye", tags=[tag])

        await test_client.delete(f"/api/notes/{note['id']}")

        assert (await test_client.get(f"/api/tags/{tag}")).status_code == 200
        assert (await test_client.get("/api/notes", params={"tagId": tag})).json() == []


class TestReferencedRowDeletion:

    @pytest.mark.asyncio
    async def test_deleting_folder_unfiles_its_notes(self, test_client):
        folder_id = await make_folder(test_client, "Temp")
        note = await make_note(test_client, title="Filed", folderId=folder_id)

        response = await test_client.delete(f"/api/folders/{folder_id}")

        assert response.status_code == 204
        fetched = (await test_client.get(f"/api/notes/{note['id']}")).json()
        assert fetched["folderId"] is None
        assert fetched["folderName"] is None

    @pytest.mark.asyncio
    async def test_deleting_tag_detaches_it_from_notes(self, test_client):
        gone = await make_tag(test_client, "gone")
        kept = await make_tag(test_client, "kept")
        note = await make_note(test_client, title="Tagged", tags=[gone, kept])

        await test_client.delete(f"/api/tags/{gone}")

        fetched = (await test_client.get(f"/api/notes/{note['id']}")).json()
        assert tag_ids(fetched) == [kept]
