"""Strongly typed identifiers for blog entities.

NewType keeps ids of different entities from being mixed up.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
CategoryId = NewType("CategoryId", UUID)
PostId = NewType("PostId", UUID)
TagId = NewType("TagId", UUID)
PostLikeId = NewType("PostLikeId", UUID)
