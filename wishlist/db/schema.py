"""Database schema DDL — users and the items they wish for."""

SCHEMA_DDL = """
PRAGMA foreign_keys = ON;

-- ==========================================================================
-- Users (registered once, never updated by the store)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS users (
    id      INTEGER PRIMARY KEY,
    name    TEXT UNIQUE NOT NULL,
    email   TEXT UNIQUE NOT NULL
);

-- ==========================================================================
-- Items (reserved_by NULL means nobody reserved it)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS items (
    id          INTEGER PRIMARY KEY,
    name        TEXT NOT NULL,
    link        TEXT NOT NULL,
    created_by  INTEGER NOT NULL,
    reserved_by INTEGER,

    FOREIGN KEY(reserved_by) REFERENCES users(id),
    FOREIGN KEY(created_by) REFERENCES users(id)
);
"""
