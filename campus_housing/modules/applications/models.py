# Supabase table: applications
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

applications:
- id: uuid (primary key)
- listing_id: uuid (foreign key to listings.id, not null)
- applicant_id: uuid (foreign key to profiles.id, not null)
- group_id: uuid (foreign key to groups.id, nullable) - set when applying as a group
- status: text (not null, default: 'pending') - values: pending, accepted, rejected
- message: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
