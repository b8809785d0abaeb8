# Follow graph resolvers
from flask import current_app
from sqlalchemy.exc import IntegrityError

from errors import conflict, not_found, validation_error
from forms import validate_id
from models import Follower, User
from payloads import UserCounts, follow_payload


class FollowResolvers:

    def __init__(self, store):
        self.store = store

    def follow_user(self, viewer, user_id):
        current_user_id = viewer.require()
        user_id = validate_id(user_id, "User id")

        if current_user_id == user_id:
            raise validation_error("Cannot follow yourself")

        if not self.store.get(User, user_id):
            raise not_found("User not found")

        if self.store.follow_for(current_user_id, user_id):
            raise conflict("Already following this user")

        try:
            self.store.save(Follower(follower_id=current_user_id, following_id=user_id))
        except IntegrityError:
            # A concurrent request created the same edge first
            raise conflict("Already following this user")

        current_app.logger.info("User %s followed %s", current_user_id, user_id)
        return True

    def unfollow_user(self, viewer, user_id):
        current_user_id = viewer.require()
        user_id = validate_id(user_id, "User id")

        follow = self.store.follow_for(current_user_id, user_id)
        if not follow:
            raise conflict("Not following this user")

        self.store.delete(follow)
        current_app.logger.info("User %s unfollowed %s", current_user_id, user_id)
        return True

    def is_following(self, viewer, follower_id, following_id):
        viewer.require()
        follower_id = validate_id(follower_id, "Follower id")
        following_id = validate_id(following_id, "Following id")
        return self.store.follow_for(follower_id, following_id) is not None

    def follows(self, viewer, user_id):
        """Follow edges created by ``user_id``, each side with its counters."""
        viewer.require()
        user = self._existing_user(user_id)
        counts = UserCounts(self.store)
        edges = self.store.follows_of(user.id)
        return {
            "follows": [follow_payload(edge, counts(edge.follower), counts(edge.following))
                        for edge in edges],
            "total_count": len(edges),
        }

    def followers(self, viewer, user_id):
        """Users following ``user_id``, most recent first."""
        viewer.require()
        user = self._existing_user(user_id)
        return self._listing(self.store.followers_of(user.id))

    def following(self, viewer, user_id):
        """Users that ``user_id`` follows, most recent first."""
        viewer.require()
        user = self._existing_user(user_id)
        return self._listing(self.store.followed_by(user.id))

    def _existing_user(self, user_id):
        user = self.store.get(User, validate_id(user_id, "User id"))
        if not user:
            raise not_found("User not found")
        return user

    def _listing(self, users):
        counts = UserCounts(self.store)
        return {
            "users": [counts(user) for user in users],
            "total_count": len(users),
        }
