# Response shapes for users, posts, comments and follows
def _isoformat(value):
    return value.isoformat() if value else None


def user_payload(user, counts):
    """Public view of a user merged with its counters. Never includes the password hash."""
    data = {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "nickname": user.nickname,
        "bio": user.bio,
        "profile_picture": user.profile_picture,
        "created_at": _isoformat(user.created_at),
        "updated_at": _isoformat(user.updated_at),
    }
    data.update(counts)
    return data


class UserCounts:
    """Counters for each distinct user, read at most once per response."""

    def __init__(self, store):
        self.store = store
        self._counts = {}

    def __call__(self, user):
        if user.id not in self._counts:
            self._counts[user.id] = self.store.user_counts(user.id)
        return user_payload(user, self._counts[user.id])


def post_payload(post, author, viewer_id):
    likes = post.likes
    return {
        "id": post.id,
        "title": post.title,
        "description": post.description,
        "beers_count": post.beers_count,
        "image_url": post.image_url,
        "author": author,
        "likes_count": len(likes),
        "is_liked": viewer_id is not None and any(like.user_id == viewer_id for like in likes),
        "created_at": _isoformat(post.created_at),
        "updated_at": _isoformat(post.updated_at),
    }


def comment_payload(comment, user):
    return {
        "id": comment.id,
        "text": comment.text,
        "post_id": comment.post_id,
        "user": user,
        "created_at": _isoformat(comment.created_at),
        "updated_at": _isoformat(comment.updated_at),
    }


def follow_payload(follow, follower, following):
    return {
        "id": follow.id,
        "follower_id": follow.follower_id,
        "following_id": follow.following_id,
        "follower": follower,
        "following": following,
        "created_at": _isoformat(follow.created_at),
    }
