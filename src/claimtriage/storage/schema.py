"""Database schema initialization for the claim store."""

from __future__ import annotations


INIT_SCHEMA = """
-- Billing providers
CREATE TABLE IF NOT EXISTS providers (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    npi TEXT NOT NULL UNIQUE
);

-- User accounts acting on claims
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    role TEXT NOT NULL CHECK (role IN ('admin', 'provider_staff', 'payer_processor')),
    provider_id TEXT REFERENCES providers(id)
);

-- Per-day claim number counter
CREATE TABLE IF NOT EXISTS claim_sequences (
    day TEXT PRIMARY KEY,
    last_value INTEGER NOT NULL
);

-- Claims
CREATE TABLE IF NOT EXISTS claims (
    id TEXT PRIMARY KEY,
    claim_number TEXT NOT NULL UNIQUE,
    provider_id TEXT NOT NULL REFERENCES providers(id),
    submitted_by_user_id TEXT NOT NULL REFERENCES users(id),
    adjudicated_by_user_id TEXT REFERENCES users(id),
    patient_first_name TEXT NOT NULL,
    patient_last_name TEXT NOT NULL,
    patient_dob TEXT NOT NULL,
    patient_member_id TEXT NOT NULL,
    cpt_code TEXT NOT NULL,
    icd10_code TEXT NOT NULL,
    service_date TEXT NOT NULL,
    billed_amount TEXT NOT NULL,
    priority TEXT NOT NULL CHECK (priority IN ('URGENT', 'STANDARD', 'ROUTINE')),
    priority_confidence REAL NOT NULL CHECK (priority_confidence BETWEEN 0.0 AND 1.0),
    priority_reasoning TEXT NOT NULL CHECK (length(priority_reasoning) > 0),
    status TEXT NOT NULL CHECK (status IN ('submitted', 'approved', 'denied')),
    submitted_at TEXT NOT NULL,
    adjudicated_at TEXT,
    approved_amount TEXT,
    adjudication_notes TEXT,
    denial_reason_code TEXT,
    denial_explanation TEXT,
    CHECK (
        (status = 'submitted' AND approved_amount IS NULL AND denial_reason_code IS NULL
            AND adjudicated_at IS NULL)
        OR (status = 'approved' AND approved_amount IS NOT NULL AND denial_reason_code IS NULL
            AND adjudicated_at IS NOT NULL)
        OR (status = 'denied' AND approved_amount IS NULL AND denial_reason_code IS NOT NULL
            AND denial_explanation IS NOT NULL AND adjudicated_at IS NOT NULL)
    )
);

-- Append-only audit log
CREATE TABLE IF NOT EXISTS audit_logs (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    id TEXT NOT NULL UNIQUE,
    claim_id TEXT NOT NULL REFERENCES claims(id),
    user_id TEXT NOT NULL REFERENCES users(id),
    action TEXT NOT NULL CHECK (action IN ('submitted', 'approved', 'denied')),
    old_status TEXT,
    new_status TEXT NOT NULL,
    details TEXT NOT NULL DEFAULT '{}',
    created_at TEXT NOT NULL
);

CREATE TRIGGER IF NOT EXISTS audit_logs_no_update BEFORE UPDATE ON audit_logs BEGIN
    SELECT RAISE(ABORT, 'audit log entries are immutable');
END;

CREATE TRIGGER IF NOT EXISTS audit_logs_no_delete BEFORE DELETE ON audit_logs BEGIN
    SELECT RAISE(ABORT, 'audit log entries are immutable');
END;

-- Indexes
CREATE INDEX IF NOT EXISTS idx_claims_submitted_at ON claims(submitted_at);
CREATE INDEX IF NOT EXISTS idx_claims_status ON claims(status);
CREATE INDEX IF NOT EXISTS idx_claims_provider ON claims(provider_id);
CREATE INDEX IF NOT EXISTS idx_audit_logs_claim ON audit_logs(claim_id, created_at);
"""
