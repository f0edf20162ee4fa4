"""SQLite-backed claim store."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from claimtriage.core.errors import ConflictError, NotFoundError, StorageError
from claimtriage.core.models import AuditLogEntry, Claim
from claimtriage.core.types import AuditAction, ClaimStatus
from claimtriage.storage.base import ClaimStore
from claimtriage.storage.converters import (
    audit_entry_to_params,
    claim_to_params,
    dt_to_db,
    row_to_audit_entry,
    row_to_claim,
    row_to_provider,
    row_to_user,
)
from claimtriage.storage.schema import INIT_SCHEMA
from claimtriage.storage.sequence import SequenceIssuer


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from datetime import date, datetime

    from claimtriage.adjudication.state_machine import AdjudicationOutcome
    from claimtriage.core.models import ClaimCreate, PriorityResult, Provider, User
    from claimtriage.core.types import Priority

logger = logging.getLogger(__name__)

CLAIM_COLUMNS = (
    "id", "claim_number", "provider_id", "submitted_by_user_id", "adjudicated_by_user_id",
    "patient_first_name", "patient_last_name", "patient_dob", "patient_member_id",
    "cpt_code", "icd10_code", "service_date", "billed_amount",
    "priority", "priority_confidence", "priority_reasoning",
    "status", "submitted_at", "adjudicated_at", "approved_amount", "adjudication_notes",
    "denial_reason_code", "denial_explanation",
)
INSERT_CLAIM_SQL = (
    f"INSERT INTO claims ({', '.join(CLAIM_COLUMNS)}) "
    f"VALUES ({', '.join(':' + c for c in CLAIM_COLUMNS)})"
)
INSERT_AUDIT_SQL = (
    "INSERT INTO audit_logs (id, claim_id, user_id, action, old_status, new_status, details, created_at) "
    "VALUES (?, ?, ?, ?, ?, ?, ?, ?)"
)


class SQLiteClaimStore(ClaimStore):
    """SQLite repository for claims, audit entries and the parties acting on them.

    Every write runs in a ``BEGIN IMMEDIATE`` transaction, which takes the
    database write lock up front; concurrent writers queue on it for up to
    ``busy_timeout`` seconds.
    """

    def __init__(
        self,
        db_path: str | Path = "claims.db",
        busy_timeout: float = 30.0,
        issuer: SequenceIssuer | None = None,
    ) -> None:
        self.db_path = Path(db_path)
        self.busy_timeout = busy_timeout
        self.issuer = issuer or SequenceIssuer()
        self._init_db()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.busy_timeout, isolation_level=None)
        except sqlite3.Error as e:
            raise StorageError(f"Could not open claim store: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
        except sqlite3.Error as e:
            raise StorageError(f"Storage operation failed: {e}") from e
        finally:
            conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def _init_db(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connection() as conn:
            conn.execute("PRAGMA journal_mode = WAL")
            conn.executescript(INIT_SCHEMA)

    # Parties

    def add_provider(self, provider: Provider) -> Provider:
        with self._transaction() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO providers (id, name, npi) VALUES (?, ?, ?)",
                (provider.id, provider.name, provider.npi),
            )
        return provider

    def add_user(self, user: User) -> User:
        with self._transaction() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO users (id, email, first_name, last_name, role, provider_id)
                VALUES (?, ?, ?, ?, ?, ?)""",
                (user.id, user.email, user.first_name, user.last_name, user.role.value, user.provider_id),
            )
        return user

    def get_provider(self, provider_id: str) -> Provider | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM providers WHERE id = ?", (provider_id,)).fetchone()
        return row_to_provider(row) if row else None

    def get_user(self, user_id: str) -> User | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return row_to_user(row) if row else None

    # Claims

    def issue_claim_number(self, day: date) -> str:
        with self._transaction() as conn:
            return self.issuer.issue(conn, day)

    def create_claim(
        self,
        submission: ClaimCreate,
        priority: PriorityResult,
        provider_id: str,
        submitted_by_user_id: str,
        submitted_at: datetime,
    ) -> Claim:
        with self._transaction() as conn:
            claim_number = self.issuer.issue(conn, submitted_at.date())
            claim = Claim(
                id=uuid.uuid4().hex,
                claim_number=claim_number,
                provider_id=provider_id,
                submitted_by_user_id=submitted_by_user_id,
                patient_first_name=submission.patient.first_name,
                patient_last_name=submission.patient.last_name,
                patient_dob=submission.patient.date_of_birth,
                patient_member_id=submission.patient.member_id,
                cpt_code=submission.service.cpt_code,
                icd10_code=submission.service.icd10_code,
                service_date=submission.service.service_date,
                billed_amount=submission.service.billed_amount,
                priority=priority.priority,
                priority_confidence=priority.confidence,
                priority_reasoning=priority.reasoning,
                status=ClaimStatus.SUBMITTED,
                submitted_at=submitted_at,
            )
            entry = AuditLogEntry(
                id=uuid.uuid4().hex,
                claim_id=claim.id,
                user_id=submitted_by_user_id,
                action=AuditAction.SUBMITTED,
                old_status=None,
                new_status=ClaimStatus.SUBMITTED,
                details={"claimNumber": claim_number, "billedAmount": str(claim.billed_amount)},
                created_at=submitted_at,
            )
            conn.execute(INSERT_CLAIM_SQL, claim_to_params(claim))
            conn.execute(INSERT_AUDIT_SQL, audit_entry_to_params(entry))
        logger.debug("Inserted claim %s", claim_number)
        return claim

    def get_claim(self, claim_id: str) -> Claim | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM claims WHERE id = ?", (claim_id,)).fetchone()
        return row_to_claim(row) if row else None

    def get_claim_by_number(self, claim_number: str) -> Claim | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM claims WHERE claim_number = ?", (claim_number,)).fetchone()
        return row_to_claim(row) if row else None

    def adjudicate(self, claim_id: str, apply: Callable[[Claim], AdjudicationOutcome]) -> Claim:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM claims WHERE id = ?", (claim_id,)).fetchone()
            if row is None:
                raise NotFoundError("Claim not found", details={"claim_id": claim_id})
            current = row_to_claim(row)
            outcome = apply(current)
            params = claim_to_params(outcome.claim)
            cursor = conn.execute(
                """UPDATE claims SET status = :status, adjudicated_by_user_id = :adjudicated_by_user_id,
                adjudicated_at = :adjudicated_at, approved_amount = :approved_amount,
                adjudication_notes = :adjudication_notes, denial_reason_code = :denial_reason_code,
                denial_explanation = :denial_explanation
                WHERE id = :id AND status = :expected_status""",
                {**params, "expected_status": current.status.value},
            )
            if cursor.rowcount != 1:
                raise ConflictError("Claim has already been adjudicated", details={"claim_id": claim_id})
            conn.execute(INSERT_AUDIT_SQL, audit_entry_to_params(outcome.audit_entry))
        logger.debug("Persisted decision for claim %s", outcome.claim.claim_number)
        return outcome.claim

    def list_claims(
        self,
        status: ClaimStatus | None = None,
        priority: Priority | None = None,
        provider_id: str | None = None,
    ) -> list[Claim]:
        conditions, params = ["1 = 1"], []
        if status:
            conditions.append("status = ?")
            params.append(status.value)
        if priority:
            conditions.append("priority = ?")
            params.append(priority.value)
        if provider_id:
            conditions.append("provider_id = ?")
            params.append(provider_id)
        query = f"SELECT * FROM claims WHERE {' AND '.join(conditions)} ORDER BY submitted_at DESC"
        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [row_to_claim(r) for r in rows]

    def audit_trail(self, claim_id: str) -> list[AuditLogEntry]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT * FROM audit_logs WHERE claim_id = ? ORDER BY created_at, seq", (claim_id,)
            ).fetchall()
        return [row_to_audit_entry(r) for r in rows]

    def claims_submitted_between(self, start: datetime, end: datetime) -> list[Claim]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT * FROM claims WHERE submitted_at >= ? AND submitted_at <= ? ORDER BY submitted_at, claim_number",
                (dt_to_db(start), dt_to_db(end)),
            ).fetchall()
        return [row_to_claim(r) for r in rows]

    def get_stats(self) -> dict[str, Any]:
        """Row counts for the console."""
        with self._connection() as conn:
            by_status = conn.execute("SELECT status, COUNT(*) AS cnt FROM claims GROUP BY status").fetchall()
            return {
                "providers": conn.execute("SELECT COUNT(*) FROM providers").fetchone()[0],
                "users": conn.execute("SELECT COUNT(*) FROM users").fetchone()[0],
                "claims": conn.execute("SELECT COUNT(*) FROM claims").fetchone()[0],
                "audit_entries": conn.execute("SELECT COUNT(*) FROM audit_logs").fetchone()[0],
                "by_status": {r["status"]: r["cnt"] for r in by_status},
            }
