"""Reference providers and users for a fresh claim store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claimtriage.core.models import Provider, User
from claimtriage.core.types import UserRole


if TYPE_CHECKING:
    from claimtriage.storage.base import ClaimStore


SAMPLE_PROVIDERS = [
    Provider(id="prov-lpcc", name="Louisville Primary Care Clinic", npi="1234567890"),
    Provider(id="prov-memorial", name="Memorial Hospital", npi="0987654321"),
]

SAMPLE_USERS = [
    User(id="user-sjones", email="sarah.jones@lpcc.com", first_name="Sarah", last_name="Jones",
         role=UserRole.PROVIDER_STAFF, provider_id="prov-lpcc"),
    User(id="user-jsmith", email="john.smith@memorial.com", first_name="John", last_name="Smith",
         role=UserRole.PROVIDER_STAFF, provider_id="prov-memorial"),
    User(id="user-mwilliams", email="marcus.williams@humana.com", first_name="Marcus", last_name="Williams",
         role=UserRole.PAYER_PROCESSOR),
    User(id="user-lchen", email="lisa.chen@uhc.com", first_name="Lisa", last_name="Chen",
         role=UserRole.PAYER_PROCESSOR),
]


def seed_sample_data(store: ClaimStore) -> tuple[int, int]:
    """Insert or refresh the sample providers and users. Returns their counts."""
    for provider in SAMPLE_PROVIDERS:
        store.add_provider(provider)
    for user in SAMPLE_USERS:
        store.add_user(user)
    return len(SAMPLE_PROVIDERS), len(SAMPLE_USERS)
