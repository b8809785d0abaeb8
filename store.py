# Store client handed to every resolver
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Comment, Follower, Like, Post, User

_SKIPPED = object()


def fan_out(*calls, max_workers=None):
    """Run independent zero-argument callables concurrently.

    Results come back in the order the calls were given. As soon as one call
    fails, calls that have not started yet are cancelled and the failure is
    re-raised; calls already running are allowed to finish.
    """
    if not calls:
        return []
    failed = threading.Event()

    def guarded(call):
        # Calls picked up by a worker after a failure never run
        if failed.is_set():
            return _SKIPPED
        try:
            return call()
        except BaseException:
            failed.set()
            raise

    executor = ThreadPoolExecutor(max_workers=max_workers or len(calls))
    try:
        futures = [executor.submit(guarded, call) for call in calls]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in pending:
            future.cancel()
        for future in futures:
            if future in done and future.exception() is not None:
                raise future.exception()
        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=True, cancel_futures=True)


class Store:
    """Typed reads and writes over a Flask-SQLAlchemy handle.

    Request work goes through ``db.session``. Counter reads run on worker
    threads, each in its own short-lived session bound to the engine, so the
    request session is never shared across threads.
    """

    def __init__(self, db, max_workers=4):
        self.db = db
        self.max_workers = max_workers

    @property
    def session(self):
        return self.db.session

    # Generic writes

    def get(self, model, ident):
        return self.session.get(model, ident)

    def save(self, obj):
        self.session.add(obj)
        self.commit()
        return obj

    def delete(self, obj):
        self.session.delete(obj)
        self.commit()

    def commit(self):
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise

    # Users

    def user_by_email(self, email):
        return User.query.filter_by(email=email).first()

    # Posts, likes and comments

    def posts_page(self, limit, cursor=None, author_ids=None):
        """Fetch up to ``limit + 1`` posts below ``cursor``, newest id first."""
        query = Post.query
        if author_ids is not None:
            query = query.filter(Post.author_id.in_(author_ids))
        if cursor is not None:
            query = query.filter(Post.id < cursor)
        return query.order_by(Post.id.desc()).limit(limit + 1).all()

    def like_for(self, user_id, post_id):
        return Like.query.filter_by(user_id=user_id, post_id=post_id).first()

    def comments_for(self, post_id):
        return Comment.query.filter_by(post_id=post_id)\
            .order_by(Comment.created_at.asc(), Comment.id.asc())\
            .all()

    # Follow graph

    def follow_for(self, follower_id, following_id):
        return Follower.query.filter_by(
            follower_id=follower_id,
            following_id=following_id
        ).first()

    def following_ids(self, user_id):
        rows = self.session.query(Follower.following_id)\
            .filter(Follower.follower_id == user_id)\
            .all()
        return [following_id for (following_id,) in rows]

    def follows_of(self, user_id):
        """Follow edges created by ``user_id``, most recent first."""
        return Follower.query.filter_by(follower_id=user_id)\
            .order_by(Follower.created_at.desc(), Follower.id.desc())\
            .all()

    def followers_of(self, user_id):
        return self.session.query(User)\
            .join(Follower, User.id == Follower.follower_id)\
            .filter(Follower.following_id == user_id)\
            .order_by(Follower.created_at.desc(), Follower.id.desc())\
            .all()

    def followed_by(self, user_id):
        return self.session.query(User)\
            .join(Follower, User.id == Follower.following_id)\
            .filter(Follower.follower_id == user_id)\
            .order_by(Follower.created_at.desc(), Follower.id.desc())\
            .all()

    # Aggregate counters

    def user_counts(self, user_id):
        engine = self.db.engine

        def scalar(build):
            def run():
                with Session(engine) as session:
                    return build(session).scalar()
            return run

        follower_count, following_count, total_posts, total_beers = fan_out(
            scalar(lambda s: s.query(self.db.func.count(Follower.id))
                   .filter(Follower.following_id == user_id)),
            scalar(lambda s: s.query(self.db.func.count(Follower.id))
                   .filter(Follower.follower_id == user_id)),
            scalar(lambda s: s.query(self.db.func.count(Post.id))
                   .filter(Post.author_id == user_id)),
            scalar(lambda s: s.query(self.db.func.sum(Post.beers_count))
                   .filter(Post.author_id == user_id)),
            max_workers=self.max_workers,
        )
        return {
            "follower_count": int(follower_count or 0),
            "following_count": int(following_count or 0),
            "total_posts_count": int(total_posts or 0),
            "total_beers_count": int(total_beers or 0),
        }
