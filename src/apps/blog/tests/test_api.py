"""API tests for the blog posts resource."""

import pytest
from django.db import DatabaseError
from rest_framework import status

from src.apps.blog.exceptions import NotFound
from src.apps.blog.models import BlogPost
from src.apps.blog.serializers import PostSerializer
from src.apps.blog.store import get_post_store

POST_FIELDS = {"id", "author", "title", "created", "content"}


class TestListPosts:
    def test_returns_every_post(self, api_client, seeded_posts):
        response = api_client.get("/posts")

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["blogposts"]) == get_post_store().count() == 10

    def test_posts_have_all_fields(self, api_client, seeded_posts):
        response = api_client.get("/posts")

        assert response["Content-Type"] == "application/json"
        body = response.json()["blogposts"]
        for post in body:
            assert set(post) == POST_FIELDS

        first = get_post_store().find_by_id(body[0]["id"])
        assert body[0] == PostSerializer(first).data

    def test_empty_store_still_returns_envelope(self, api_client):
        response = api_client.get("/posts")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"blogposts": []}

    def test_trailing_slash_is_accepted(self, api_client, seeded_posts):
        response = api_client.get("/posts/")

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["blogposts"]) == len(seeded_posts)

    def test_store_failure_is_a_generic_500(self, api_client, mocker):
        mocker.patch.object(
            BlogPost.objects, "all", side_effect=DatabaseError("database is locked")
        )

        response = api_client.get("/posts")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"message": "The blog post store is unavailable."}


class TestCreatePost:
    def test_creates_post(self, api_client, draft):
        response = api_client.post("/posts", draft, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert set(body) == POST_FIELDS
        assert body["id"]
        assert body["created"]
        assert body["author"] == draft["author"]
        assert body["title"] == draft["title"]
        assert body["content"] == draft["content"]

        stored = get_post_store().find_by_id(body["id"])
        assert PostSerializer(stored).data == body

    def test_content_is_optional(self, api_client):
        response = api_client.post("/posts", {"author": "A", "title": "T"}, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["content"] == ""

    def test_null_content_is_stored_empty(self, api_client):
        response = api_client.post(
            "/posts", {"author": "A", "title": "T", "content": None}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["content"] == ""
        assert get_post_store().find_by_id(response.json()["id"]).content == ""

    @pytest.mark.parametrize("missing", ["author", "title"])
    def test_missing_required_field(self, api_client, draft, missing):
        del draft[missing]

        response = api_client.post("/posts", draft, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert missing in response.json()["message"]
        assert get_post_store().count() == 0

    def test_blank_title(self, api_client, draft):
        draft["title"] = "   "

        response = api_client.post("/posts", draft, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "message" in response.json()

    def test_malformed_json(self, api_client):
        response = api_client.post(
            "/posts", data="{not json", content_type="application/json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "message" in response.json()

    def test_non_object_body(self, api_client):
        response = api_client.post("/posts", ["A", "T"], format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "message" in response.json()


class TestUpdatePost:
    def test_updates_fields_sent(self, api_client, seeded_posts):
        post = seeded_posts[0]
        update_data = {"id": post.id, "author": "John Madden", "title": "FOOTBALL"}

        response = api_client.put(f"/posts/{post.id}", update_data, format="json")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        updated = get_post_store().find_by_id(post.id)
        assert updated.author == "John Madden"
        assert updated.title == "FOOTBALL"
        assert updated.content == post.content
        assert updated.created == post.created

    def test_body_id_is_optional(self, api_client, seeded_posts):
        post = seeded_posts[0]

        response = api_client.put(f"/posts/{post.id}", {"content": "new"}, format="json")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert get_post_store().find_by_id(post.id).content == "new"

    def test_null_content_clears_body(self, api_client, seeded_posts):
        post = seeded_posts[0]

        response = api_client.put(f"/posts/{post.id}", {"content": None}, format="json")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        updated = get_post_store().find_by_id(post.id)
        assert updated.content == ""
        assert updated.title == post.title

    def test_mismatched_ids_are_rejected(self, api_client, seeded_posts):
        target, other = seeded_posts[0], seeded_posts[1]

        response = api_client.put(
            f"/posts/{target.id}", {"id": other.id, "title": "Hijack"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "must match" in response.json()["message"]
        assert get_post_store().find_by_id(target.id) == target
        assert get_post_store().find_by_id(other.id) == other

    def test_created_in_body_is_ignored(self, api_client, seeded_posts):
        post = seeded_posts[0]

        response = api_client.put(
            f"/posts/{post.id}",
            {"created": "1999-01-01T00:00:00Z", "title": "Same time"},
            format="json",
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert get_post_store().find_by_id(post.id).created == post.created

    def test_blank_author_is_rejected(self, api_client, seeded_posts):
        post = seeded_posts[0]

        response = api_client.put(f"/posts/{post.id}", {"author": ""}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert get_post_store().find_by_id(post.id).author == post.author

    def test_missing_post(self, api_client, seeded_posts):
        response = api_client.put(
            "/posts/missing", {"id": "missing", "title": "T"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "missing" in response.json()["message"]


class TestDeletePost:
    def test_deletes_post(self, api_client, seeded_posts):
        post = seeded_posts[0]

        response = api_client.delete(f"/posts/{post.id}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        with pytest.raises(NotFound):
            get_post_store().find_by_id(post.id)
        assert get_post_store().count() == len(seeded_posts) - 1

    def test_second_delete_is_not_found(self, api_client, seeded_posts):
        post = seeded_posts[0]
        api_client.delete(f"/posts/{post.id}")

        response = api_client.delete(f"/posts/{post.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "message" in response.json()
        assert get_post_store().count() == len(seeded_posts) - 1


class TestUnsupportedRoutes:
    def test_single_post_is_not_readable(self, api_client, seeded_posts):
        response = api_client.get(f"/posts/{seeded_posts[0].id}")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert "message" in response.json()

    def test_collection_is_not_deletable(self, api_client):
        response = api_client.delete("/posts")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    def test_schema_documents_posts(self, api_client):
        response = api_client.get("/api/schema/")

        assert response.status_code == status.HTTP_200_OK
        assert b"/posts" in response.content

    def test_unknown_url_is_json_404(self, api_client):
        response = api_client.get("/nothing/here")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Not found."}


class TestInMemoryBackend:
    """The API behaves the same when configured with the in-memory store."""

    @pytest.fixture(autouse=True)
    def use_memory_store(self, settings):
        settings.BLOG_POSTS = {
            "STORE": "src.apps.blog.store.InMemoryPostStore",
            "ID_GENERATOR": "src.apps.blog.ids.SequentialIdGenerator",
        }

    def test_create_update_delete(self, api_client):
        created = api_client.post("/posts", {"author": "A", "title": "T"}, format="json")
        post_id = created.json()["id"]

        assert post_id == "post-1"
        assert BlogPost.objects.count() == 0

        assert api_client.put(
            f"/posts/{post_id}", {"title": "T2"}, format="json"
        ).status_code == status.HTTP_204_NO_CONTENT
        assert api_client.get("/posts").json()["blogposts"][0]["title"] == "T2"

        assert api_client.delete(f"/posts/{post_id}").status_code == 204
        assert api_client.delete(f"/posts/{post_id}").status_code == 404
