"""Discussion engine: threaded comments on ideas.

Comments are stored flat with a ``parent_comment_id`` pointer and assembled
into a reply forest on read. Deleting a comment removes its whole subtree
using an explicit count-then-act protocol, after which the owning idea's
``comment_count`` is adjusted by the number of top-level rows removed.
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, Literal, Protocol, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from idea_catalog.core.errors import Forbidden, NotFound
from idea_catalog.core.settings import settings
from idea_catalog.db.time import utcnow
from idea_catalog.models import Comment, Idea, User
from idea_catalog.schemas.comment import CommentNode, CommentResponse
from idea_catalog.schemas.common import AuthorInfo
from idea_catalog.services import counters

logger = logging.getLogger(__name__)

AuthorSource = Literal["joined", "lookup", "anonymous"]
AuthorLookup = Callable[[uuid.UUID], User | None]


class ThreadedItem(Protocol):
    id: uuid.UUID
    parent_comment_id: uuid.UUID | None


T = TypeVar("T", bound=ThreadedItem)


@dataclass(frozen=True)
class AuthorName:
    """Display name of a comment author and how it was obtained."""

    name: str
    source: AuthorSource

    def as_info(self) -> AuthorInfo:
        return AuthorInfo(display_name=self.name, source=self.source)


@dataclass
class TreeNode(Generic[T]):
    """A comment placed in the reply forest."""

    comment: T
    depth: int
    replies: list[TreeNode[T]] = field(default_factory=list)


def session_lookup(db: Session) -> AuthorLookup:
    """Return an author lookup backed by ``db``."""

    def lookup(user_id: uuid.UUID) -> User | None:
        return db.get(User, user_id)

    return lookup


def resolve_author_name(
    joined: User | None,
    user_id: uuid.UUID | None,
    lookup: AuthorLookup | None = None,
) -> AuthorName:
    """Resolve the display name shown next to a comment.

    The joined author row wins when it carries a display name. Otherwise the
    author is looked up by id, and if that also yields nothing (or fails) the
    anonymous label is used. This never raises.
    """
    if joined is not None and joined.display_name:
        return AuthorName(joined.display_name, "joined")

    if user_id is not None and lookup is not None:
        try:
            found = lookup(user_id)
        except SQLAlchemyError:
            logger.warning("Author lookup failed for user %s", user_id, exc_info=True)
            found = None
        if found is not None and found.display_name:
            return AuthorName(found.display_name, "lookup")

    return AuthorName(settings.anonymous_display_name, "anonymous")


def build_comment_tree(comments: Iterable[T]) -> list[TreeNode[T]]:
    """Assemble a flat comment collection into a reply forest.

    Roots are comments without a parent, kept in input order; replies keep
    input order under their parent. Duplicate ids keep their first
    occurrence. Self-parented rows, replies whose parent is absent, and
    cycles are unreachable from a root and are dropped, so every comment
    appears at most once and never below itself.
    """
    by_id: dict[uuid.UUID, T] = {}
    for comment in comments:
        by_id.setdefault(comment.id, comment)

    roots: list[T] = []
    children: dict[uuid.UUID, list[T]] = defaultdict(list)
    for comment in by_id.values():
        parent_id = comment.parent_comment_id
        if parent_id is None:
            roots.append(comment)
        elif parent_id != comment.id:
            children[parent_id].append(comment)

    forest = [TreeNode(comment=root, depth=0) for root in roots]
    placed = {node.comment.id for node in forest}
    pending = list(forest)
    while pending:
        node = pending.pop()
        for child in children.get(node.comment.id, ()):
            if child.id in placed:
                continue
            placed.add(child.id)
            child_node = TreeNode(comment=child, depth=node.depth + 1)
            node.replies.append(child_node)
            pending.append(child_node)

    return forest


def count_nodes(forest: Iterable[TreeNode[Any]] | Iterable[CommentNode]) -> int:
    """Number of comments placed in ``forest``."""
    total = 0
    pending: list[Any] = list(forest)
    while pending:
        node = pending.pop()
        total += 1
        pending.extend(node.replies)
    return total


def _comment_fields(comment: Comment) -> dict[str, object]:
    return {
        "id": comment.id,
        "idea_id": comment.idea_id,
        "user_id": comment.user_id,
        "parent_comment_id": comment.parent_comment_id,
        "content": comment.content,
        "flagged_for_moderation": comment.flagged_for_moderation,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def describe_comment(
    db: Session,
    comment: Comment,
    author: User | None = None,
    lookup: AuthorLookup | None = None,
) -> CommentResponse:
    """Render a single comment with its resolved author name."""
    name = resolve_author_name(author, comment.user_id, lookup or session_lookup(db))
    return CommentResponse(**_comment_fields(comment), user=name.as_info())


def _get_idea_or_404(db: Session, idea_id: uuid.UUID) -> Idea:
    idea = db.get(Idea, idea_id)
    if idea is None:
        raise NotFound("Idea not found")
    return idea


def _get_comment_or_404(db: Session, comment_id: uuid.UUID, message: str = "Comment not found") -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFound(message)
    return comment


@dataclass
class CommentThread:
    """Reply forest for one idea plus the number of comment rows it holds."""

    forest: list[CommentNode]
    total: int


def list_comments(
    db: Session,
    idea_id: uuid.UUID,
    lookup: AuthorLookup | None = None,
) -> CommentThread:
    """Return the reply forest for an idea, newest top-level comments first.

    ``total`` is the flat row count, which can exceed the number of placed
    nodes when rows form a cycle.

    Raises:
        NotFound: If the idea does not exist
    """
    _get_idea_or_404(db, idea_id)

    rows = (
        db.query(Comment, User)
        .outerjoin(User, User.id == Comment.user_id)
        .filter(Comment.idea_id == idea_id)
        .order_by(Comment.created_at.desc(), Comment.id)
        .all()
    )
    authors = {comment.id: user for comment, user in rows}
    lookup = lookup or session_lookup(db)
    forest = build_comment_tree(comment for comment, _user in rows)

    def to_schema(node: TreeNode[Comment]) -> CommentNode:
        comment = node.comment
        name = resolve_author_name(authors.get(comment.id), comment.user_id, lookup)
        return CommentNode(
            **_comment_fields(comment),
            user=name.as_info(),
            depth=node.depth,
            replies=[to_schema(reply) for reply in node.replies],
        )

    return CommentThread(forest=[to_schema(node) for node in forest], total=len(rows))


def create_comment(db: Session, idea_id: uuid.UUID, author: User, content: str) -> Comment:
    """Post a top-level comment and bump the idea's ``comment_count``.

    The counter update is best-effort: the comment stays even if it fails.

    Raises:
        NotFound: If the idea does not exist
    """
    _get_idea_or_404(db, idea_id)

    comment = Comment(
        idea_id=idea_id,
        user_id=author.id,
        parent_comment_id=None,
        content=content.strip(),
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    counters.try_increment(db, idea_id, "comment_count")
    logger.info("Comment %s created on idea %s by %s", comment.id, idea_id, author.id)
    return comment


def reply_to_comment(db: Session, parent_id: uuid.UUID, author: User, content: str) -> Comment:
    """Reply to an existing comment.

    Replies inherit the parent's idea and leave ``comment_count`` untouched.

    Raises:
        NotFound: If the parent comment does not exist
    """
    parent = _get_comment_or_404(db, parent_id, "Parent comment not found")

    reply = Comment(
        idea_id=parent.idea_id,
        user_id=author.id,
        parent_comment_id=parent.id,
        content=content.strip(),
    )
    db.add(reply)
    db.commit()
    db.refresh(reply)
    logger.info("Reply %s created under comment %s by %s", reply.id, parent_id, author.id)
    return reply


def update_comment(db: Session, comment_id: uuid.UUID, author: User, content: str) -> Comment:
    """Replace the content of a comment owned by ``author``.

    Raises:
        NotFound: If the comment does not exist
        Forbidden: If ``author`` did not write the comment
    """
    comment = _get_comment_or_404(db, comment_id)
    if comment.user_id != author.id:
        raise Forbidden("You can only edit your own comments")

    comment.content = content.strip()
    comment.updated_at = utcnow()
    db.commit()
    db.refresh(comment)
    return comment


def collect_subtree_ids(db: Session, root_id: uuid.UUID) -> list[uuid.UUID]:
    """Return ``root_id`` and every transitive reply id, breadth first."""
    subtree = [root_id]
    seen = {root_id}
    frontier = [root_id]
    while frontier:
        child_ids = [
            child_id
            for (child_id,) in db.query(Comment.id)
            .filter(Comment.parent_comment_id.in_(frontier))
            .all()
        ]
        frontier = [child_id for child_id in child_ids if child_id not in seen]
        seen.update(frontier)
        subtree.extend(frontier)
    return subtree


def delete_comment(db: Session, comment_id: uuid.UUID, author: User) -> int:
    """Delete a comment and all of its replies.

    The subtree and the number of top-level rows in it are counted before
    anything is removed; ``comment_count`` is then decremented by that
    top-level count, so deleting a top-level comment lowers it by exactly
    one however many replies go with it.

    Args:
        db: Database session
        comment_id: ID of the comment to delete
        author: Caller, who must have written the comment

    Returns:
        Number of rows deleted, the target included

    Raises:
        NotFound: If the comment does not exist
        Forbidden: If ``author`` did not write the comment
    """
    comment = _get_comment_or_404(db, comment_id)
    if comment.user_id != author.id:
        raise Forbidden("You can only delete your own comments")

    idea_id = comment.idea_id
    subtree = collect_subtree_ids(db, comment.id)
    counted = (
        db.query(func.count(Comment.id))
        .filter(Comment.id.in_(subtree), Comment.parent_comment_id.is_(None))
        .scalar()
        or 0
    )

    db.query(Comment).filter(Comment.id.in_(subtree)).delete(synchronize_session="fetch")
    db.commit()

    if counted:
        counters.try_decrement(db, idea_id, "comment_count", counted)

    logger.info(
        "Comment %s deleted with %d nested repl(ies) on idea %s",
        comment_id,
        len(subtree) - 1,
        idea_id,
    )
    return len(subtree)


def flag_comment(db: Session, comment_id: uuid.UUID) -> bool:
    """Flag a comment for moderation.

    Returns:
        True if the flag was newly set, False if it was already flagged

    Raises:
        NotFound: If the comment does not exist
    """
    comment = _get_comment_or_404(db, comment_id)
    if comment.flagged_for_moderation:
        return False

    comment.flagged_for_moderation = True
    db.commit()
    logger.info("Comment %s flagged for moderation", comment_id)
    return True
