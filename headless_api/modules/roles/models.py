# Supabase tables: roles, role_permissions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

roles:
- id: bigint (primary key, generated)
- name: text (not null)
- service_id: text (foreign key to services.id, not null)
- api_key: text (unique, nullable) - role key handed out at creation; null for the default Admin role
- created_at: timestamptz (default: now())

role_permissions:
- role_id: bigint (foreign key to roles.id, on delete cascade)
- permission: text (not null) - one of Create, Read, Update, Replace, Delete
- primary key (role_id, permission)
"""
