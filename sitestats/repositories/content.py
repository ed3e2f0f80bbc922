"""
Read-only access to published posts and pages
"""
from typing import Dict, List

from .base import BaseRepository


class PublishedContentRepository(BaseRepository):

    def published(self) -> List[Dict[str, str]]:
        return self.find_many({"published": True}, {"_id": 0, "slug": 1, "title": 1})


class PostRepository(PublishedContentRepository):
    collection_name = "posts"


class PageRepository(PublishedContentRepository):
    collection_name = "pages"
