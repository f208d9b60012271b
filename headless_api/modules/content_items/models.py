# Supabase table: content_items
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

content_items:
- id: uuid (primary key, generated by the API)
- content_type_id: bigint (foreign key to content_types.id, on delete cascade)
- data: jsonb (not null) - document keyed by field display_id
- created_at: timestamptz (not null)
- updated_at: timestamptz (not null)
"""
