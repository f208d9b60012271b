# Supabase tables: content_types, fields
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

content_types:
- id: bigint (primary key, generated)
- name: text (not null)
- service_id: text (foreign key to services.id, not null)
- created_at: timestamptz (default: now())

fields:
- id: bigint (primary key, generated) - defines schema order
- content_type_id: bigint (foreign key to content_types.id, on delete cascade)
- display_id: text (not null) - key used in content item documents
- field_type: text (not null) - one of Text, Number, Date, Boolean
- required: boolean (not null, default false)
- unique constraint on (content_type_id, display_id)
"""
