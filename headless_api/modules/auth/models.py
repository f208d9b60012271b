# Admin authentication tables: users, sessions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

users:
- id: bigint (primary key, generated)
- username: text (not null, unique)
- email: text (not null, unique)
- password_hash: text (not null) - bcrypt hash, never the plain password
- created_at: timestamptz (default: now())

sessions:
- id: bigint (primary key, generated)
- session_token: text (not null, unique) - value of the session cookie
- user_id: bigint (foreign key to users.id, unique) - at most one live session per user
- created_at: timestamptz (not null) - refreshed on every login

Login upserts on user_id, so logging in again replaces the previous token.
"""
