# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- name: text (not null)
- email: text (not null) - synced from auth.users
- phone: text (nullable)
- description: text (nullable)
- profile_picture: text (nullable) - image URL
- group_id: uuid (foreign key to groups.id, nullable)
- is_landlord: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
