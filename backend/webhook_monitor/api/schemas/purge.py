"""Query parameter schema for retention purges."""

from pydantic import BaseModel, Field

# producer ids are stored in a BIGINT column
MAX_PRODUCER_ID = 2**63 - 1


class PurgeParams(BaseModel):
    producer_id: int = Field(..., ge=-MAX_PRODUCER_ID - 1, le=MAX_PRODUCER_ID)
    days_to_keep: int = Field(..., ge=0, description="Records older than this many days are purged")

    @classmethod
    def parse(cls, days_to_keep: str | None, producer_id: str | None) -> "PurgeParams":
        """Build params from raw query strings.

        Raises:
            ValueError: either value is missing, not an integer, or out of range
        """
        return cls(producer_id=producer_id, days_to_keep=days_to_keep)
