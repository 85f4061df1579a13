# Supabase tables: groups, profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

groups:
- id: uuid (primary key)
- name: text (not null)
- created_by: uuid (foreign key to profiles.id, not null)
- created_at: timestamp (default: now())

Membership is not a separate table: a student belongs to at most one group,
recorded as profiles.group_id. Joining or leaving rewrites that column.
"""
