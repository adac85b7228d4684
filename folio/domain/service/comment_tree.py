"""Reply tree construction for a post's comments."""

from collections.abc import Iterable

from folio.domain.model.comment import Comment, CommentNode
from folio.domain.value import CommentId


def build_comment_tree(comments: Iterable[Comment]) -> list[CommentNode]:
    """Assemble a flat comment list into reply trees.

    Algorithm:
    1. Create one node per comment, keyed by id
    2. Attach each node to its parent; nodes whose parent is absent from
       the list (or is the node itself) become roots
    3. Sort roots and every replies list by created_at ascending

    The sort is stable, so comments with equal timestamps keep their
    input order.

    Args:
        comments: Flat list of comments for a single post

    Returns:
        Root nodes, each carrying its nested replies
    """
    comments = list(comments)
    nodes: dict[CommentId, CommentNode] = {
        comment.id: CommentNode.from_comment(comment) for comment in comments
    }

    roots: list[CommentNode] = []
    for comment in comments:
        node = nodes[comment.id]
        parent = nodes.get(comment.parent_id) if comment.parent_id is not None else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.replies.append(node)

    roots.sort(key=lambda node: node.created_at)
    pending = list(roots)
    while pending:
        node = pending.pop()
        node.replies.sort(key=lambda reply: reply.created_at)
        pending.extend(node.replies)

    return roots


def count_nodes(nodes: Iterable[CommentNode]) -> int:
    """Count every node in a forest, replies included."""
    total = 0
    pending = list(nodes)
    while pending:
        node = pending.pop()
        total += 1
        pending.extend(node.replies)
    return total
