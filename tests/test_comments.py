"""
Tests for Comments API endpoints.
"""

import pytest

from apps.comments.models import Comment, CommentLike


@pytest.fixture
def comment(other_author, published_post):
    return Comment.objects.create(content="Nice post", author=other_author, post=published_post)


@pytest.mark.django_db
class TestCommentsAPI:
    def test_create_comment(self, api_client, other_headers, published_post):
        response = api_client.post(
            "/comments/",
            json={"content": "  Great read  ", "post": str(published_post.id)},
            headers=other_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["content"] == "Great read"
        assert data["author"]["username"] == "other"
        assert data["parentComment"] is None
        assert published_post.comments.count() == 1

    def test_create_requires_auth(self, api_client, published_post):
        response = api_client.post("/comments/", json={"content": "hi", "post": str(published_post.id)})
        assert response.status_code == 401

    def test_create_on_missing_post(self, api_client, other_headers):
        response = api_client.post(
            "/comments/",
            json={"content": "hi", "post": "00000000-0000-0000-0000-000000000000"},
            headers=other_headers,
        )
        assert response.status_code == 404

    def test_content_too_long(self, api_client, other_headers, published_post):
        response = api_client.post(
            "/comments/",
            json={"content": "x" * 1001, "post": str(published_post.id)},
            headers=other_headers,
        )
        assert response.status_code == 422

    def test_reply(self, api_client, author_headers, published_post, comment):
        response = api_client.post(
            "/comments/",
            json={"content": "Thanks!", "post": str(published_post.id), "parentComment": str(comment.id)},
            headers=author_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["parentComment"] == str(comment.id)

    def test_reply_to_reply_attaches_to_top_level(self, author_user, other_author, published_post, comment):
        from apps.comments.services import comments

        reply = comments.create(author_user, published_post.id, "first reply", parent_id=comment.id)
        nested = comments.create(other_author, published_post.id, "second reply", parent_id=reply.id)
        assert nested.parent_comment_id == comment.id

    def test_missing_parent(self, api_client, author_headers, published_post):
        response = api_client.post(
            "/comments/",
            json={
                "content": "orphan",
                "post": str(published_post.id),
                "parentComment": "00000000-0000-0000-0000-000000000000",
            },
            headers=author_headers,
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Parent comment not found"

    def test_list_for_post(self, api_client, author_user, published_post, comment):
        Comment.objects.create(content="reply", author=author_user, post=published_post, parent_comment=comment)

        response = api_client.get(f"/comments/post/{published_post.id}")
        assert response.status_code == 200
        threads = response.json()["data"]
        assert len(threads) == 1
        assert threads[0]["replyCount"] == 1
        assert threads[0]["replies"][0]["content"] == "reply"

    def test_list_for_invalid_post_id(self, api_client):
        response = api_client.get("/comments/post/not-a-uuid")
        assert response.status_code == 400

    def test_get_comment(self, api_client, comment):
        response = api_client.get(f"/comments/{comment.id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["post"]["slug"] == "published-post"

    def test_update_by_author(self, api_client, other_headers, comment):
        response = api_client.put(f"/comments/{comment.id}", json={"content": "Edited"}, headers=other_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["content"] == "Edited"
        assert data["edited"] is True
        assert data["editedAt"] is not None

    def test_update_by_someone_else(self, api_client, admin_headers, comment):
        response = api_client.put(f"/comments/{comment.id}", json={"content": "Edited"}, headers=admin_headers)
        assert response.status_code == 403

    def test_delete_cascades_replies(self, api_client, other_headers, author_user, published_post, comment):
        Comment.objects.create(content="r1", author=author_user, post=published_post, parent_comment=comment)
        Comment.objects.create(content="r2", author=author_user, post=published_post, parent_comment=comment)

        response = api_client.delete(f"/comments/{comment.id}", headers=other_headers)
        assert response.status_code == 200
        assert Comment.objects.count() == 0

    def test_admin_may_delete(self, api_client, admin_headers, comment):
        response = api_client.delete(f"/comments/{comment.id}", headers=admin_headers)
        assert response.status_code == 200

    def test_delete_by_someone_else(self, api_client, author_headers, comment):
        response = api_client.delete(f"/comments/{comment.id}", headers=author_headers)
        assert response.status_code == 403
        assert Comment.objects.filter(id=comment.id).exists()

    def test_like_toggle(self, api_client, author_headers, comment):
        response = api_client.put(f"/comments/{comment.id}/like", headers=author_headers)
        assert response.json()["data"] == {"likesCount": 1, "isLiked": True}

        response = api_client.put(f"/comments/{comment.id}/like", headers=author_headers)
        assert response.json()["data"] == {"likesCount": 0, "isLiked": False}
        assert CommentLike.objects.count() == 0

    def test_recent_admin_only(self, api_client, author_headers, admin_headers, comment):
        response = api_client.get("/comments/recent", headers=author_headers)
        assert response.status_code == 403

        response = api_client.get("/comments/recent?limit=5", headers=admin_headers)
        assert response.status_code == 200
        assert [c["content"] for c in response.json()["data"]] == ["Nice post"]


@pytest.mark.django_db
class TestCommentsOnDrafts:
    """Comments follow the visibility of their post."""

    def test_comment_on_draft_as_stranger(self, api_client, other_headers, draft_post):
        response = api_client.post(
            "/comments/",
            json={"content": "sneaky", "post": str(draft_post.id)},
            headers=other_headers,
        )
        assert response.status_code == 404
        assert Comment.objects.count() == 0

    def test_owner_may_comment_on_draft(self, api_client, author_headers, draft_post):
        response = api_client.post(
            "/comments/",
            json={"content": "note to self", "post": str(draft_post.id)},
            headers=author_headers,
        )
        assert response.status_code == 201

    def test_list_for_draft(self, api_client, author_headers, author_user, draft_post):
        Comment.objects.create(content="note", author=author_user, post=draft_post)

        response = api_client.get(f"/comments/post/{draft_post.id}")
        assert response.status_code == 404

        response = api_client.get(f"/comments/post/{draft_post.id}", headers=author_headers)
        assert response.status_code == 200
        assert [c["content"] for c in response.json()["data"]] == ["note"]

    def test_get_comment_on_draft(self, api_client, other_headers, admin_headers, author_user, draft_post):
        note = Comment.objects.create(content="note", author=author_user, post=draft_post)

        response = api_client.get(f"/comments/{note.id}", headers=other_headers)
        assert response.status_code == 404

        response = api_client.get(f"/comments/{note.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["post"]["title"] == "Draft Post"

    def test_like_comment_on_draft(self, api_client, other_headers, author_user, draft_post):
        note = Comment.objects.create(content="note", author=author_user, post=draft_post)

        response = api_client.put(f"/comments/{note.id}/like", headers=other_headers)
        assert response.status_code == 404
        assert CommentLike.objects.count() == 0


@pytest.mark.django_db
class TestRecentCommentsLimit:
    @pytest.mark.parametrize("limit", [-1, 0, 101])
    def test_out_of_range(self, api_client, admin_headers, limit):
        response = api_client.get(f"/comments/recent?limit={limit}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_upper_bound(self, api_client, admin_headers, comment):
        response = api_client.get("/comments/recent?limit=100", headers=admin_headers)
        assert response.status_code == 200
