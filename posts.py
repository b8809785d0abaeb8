# Feed, post, like and comment resolvers
from flask import current_app
from sqlalchemy.exc import IntegrityError

from errors import not_authorized, not_found
from forms import (COMMENT_MAX_LENGTH, check_length, clean_optional, require_text,
                   validate_beers_count, validate_id, validate_limit)
from models import Comment, Like, Post
from payloads import UserCounts, comment_payload, post_payload


class PostResolvers:

    def __init__(self, store, beers_min=1, beers_max=12, page_size=10, max_page_size=50):
        self.store = store
        self.beers_min = beers_min
        self.beers_max = beers_max
        self.page_size = page_size
        self.max_page_size = max_page_size

    def _existing_post(self, post_id):
        post = self.store.get(Post, validate_id(post_id, "Post id"))
        if not post:
            raise not_found("Post not found")
        return post

    def _post(self, post, viewer_id, counts=None):
        counts = counts or UserCounts(self.store)
        return post_payload(post, counts(post.author), viewer_id)

    def posts(self, viewer, limit=None, cursor=None, feed=False):
        """Keyset page over descending post ids.

        A page asks for ``limit + 1`` rows below the cursor; the extra row only
        signals that another page exists, so posts created above the cursor
        never shift pages a client has yet to read.
        """
        limit = validate_limit(limit, self.page_size, self.max_page_size)
        if cursor is not None:
            cursor = validate_id(cursor, "Cursor")

        author_ids = None
        if feed:
            author_ids = self.store.following_ids(viewer.require())
            if not author_ids:
                return {"posts": [], "has_more": False, "cursor": None}

        rows = self.store.posts_page(limit, cursor=cursor, author_ids=author_ids)
        has_more = len(rows) > limit
        page = rows[:limit]
        next_cursor = page[-1].id if has_more else None

        counts = UserCounts(self.store)
        return {
            "posts": [self._post(post, viewer.user_id, counts) for post in page],
            "has_more": has_more,
            "cursor": next_cursor,
        }

    def create_post(self, viewer, title, beers_count, image_url, description=None):
        user_id = viewer.require()

        title = require_text(title, "Title is required")
        image_url = require_text(image_url, "Image URL is required")
        beers_count = validate_beers_count(beers_count, self.beers_min, self.beers_max)

        post = self.store.save(Post(
            title=title,
            description=clean_optional(description),
            beers_count=beers_count,
            image_url=image_url,
            author_id=user_id,
        ))
        current_app.logger.info("User %s created post %s", user_id, post.id)
        return self._post(post, user_id)

    def delete_post(self, viewer, post_id):
        user_id = viewer.require()
        post = self._existing_post(post_id)
        if post.author_id != user_id:
            raise not_authorized("You can only delete your own posts")

        self.store.delete(post)
        current_app.logger.info("User %s deleted post %s", user_id, post_id)
        return True

    def toggle_like(self, viewer, post_id):
        user_id = viewer.require()
        post = self._existing_post(post_id)

        like = self.store.like_for(user_id, post.id)
        if like:
            self.store.delete(like)
        else:
            try:
                self.store.save(Like(user_id=user_id, post_id=post.id))
            except IntegrityError:
                # Lost a race with a concurrent like from the same user; it is liked either way
                pass

        post = self._existing_post(post.id)
        return self._post(post, user_id)

    def post_comments(self, post_id):
        post = self._existing_post(post_id)
        counts = UserCounts(self.store)
        return {
            "post_id": post.id,
            "comments": [comment_payload(comment, counts(comment.user))
                         for comment in self.store.comments_for(post.id)],
        }

    def create_comment(self, viewer, post_id, text):
        user_id = viewer.require()

        text = require_text(text, "Comment text is required")
        check_length(text, COMMENT_MAX_LENGTH, "Comment")
        post = self._existing_post(post_id)

        comment = self.store.save(Comment(text=text, user_id=user_id, post_id=post.id))
        return comment_payload(comment, UserCounts(self.store)(comment.user))

    def delete_comment(self, viewer, comment_id):
        user_id = viewer.require()
        comment = self.store.get(Comment, validate_id(comment_id, "Comment id"))
        if not comment:
            raise not_found("Comment not found")
        if comment.user_id != user_id:
            raise not_authorized("You can only delete your own comments")

        self.store.delete(comment)
        current_app.logger.info("User %s deleted comment %s", user_id, comment_id)
        return True
