# Supabase table: services
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

services:
- id: text (primary key) - 16 character alphanumeric id generated by the API
- name: text (not null)
- api_key: text (not null, unique) - 32 character alphanumeric key generated by the API
- owner_id: bigint (foreign key to users.id) - admin user who created the service
- created_at: timestamptz (default: now())

Deleting a service removes, in order: content_items, fields, content_types,
role_permissions, roles, then the service row itself.
"""
