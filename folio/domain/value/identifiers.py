"""Strongly typed identifiers for domain entities.

Identifiers are integers assigned by the store at creation time.
"""

from typing import NewType

PostId = NewType("PostId", int)
CommentId = NewType("CommentId", int)
