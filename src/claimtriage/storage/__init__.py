"""Storage layer for claims and audit history."""

from claimtriage.storage.base import ClaimStore
from claimtriage.storage.repository import SQLiteClaimStore
from claimtriage.storage.seed import seed_sample_data
from claimtriage.storage.sequence import SequenceIssuer, format_claim_number, parse_claim_number

__all__ = ["ClaimStore", "SQLiteClaimStore", "SequenceIssuer", "format_claim_number", "parse_claim_number", "seed_sample_data"]
