"""
Durable progress checkpoint for the aggregate backfill

Each start stamps the checkpoint with a fresh ``run_id``. Chunks save
progress only under their own run id, so a chain that was superseded by a
restart can no longer overwrite the checkpoint of the newer run.
"""
from typing import Any, Dict, Optional

from bson import ObjectId

from .base import BaseRepository

BACKFILL_ID = "aggregates"


class BackfillStateRepository(BaseRepository):

    collection_name = "backfill_state"

    def get(self) -> Optional[Dict[str, Any]]:
        return self.find_one({"_id": BACKFILL_ID})

    def start(self, now: int) -> str:
        """Reset the checkpoint for a new run and return its run id"""
        run_id = str(ObjectId())
        self.collection.replace_one(
            {"_id": BACKFILL_ID},
            {
                "_id": BACKFILL_ID,
                "run_id": run_id,
                "status": "in_progress",
                "processed": 0,
                "unique_sessions": 0,
                "cursor": None,
                "error": None,
                "started_at": now,
                "updated_at": now,
            },
            upsert=True,
        )
        return run_id

    def save(self, run_id: str, now: int, **fields: Any) -> bool:
        """Update the checkpoint of ``run_id``; False once another run owns it"""
        fields["updated_at"] = now
        result = self.collection.update_one(
            {"_id": BACKFILL_ID, "run_id": run_id},
            {"$set": fields},
        )
        return result.matched_count == 1
