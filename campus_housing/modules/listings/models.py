# Supabase table: listings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

listings:
- id: uuid (primary key)
- landlord_id: uuid (foreign key to profiles.id, not null)
- title: text (not null)
- description: text (nullable)
- address: text (not null) - free-form, geocoded on demand for distance search
- price: numeric (not null) - monthly rent
- bedrooms: integer (not null)
- bathrooms: numeric (not null)
- is_on_campus: boolean (default: false)
- gender_preference: text (default: 'any') - values: any, male, female
- rental_type: text (not null) - values: apartment, house, room, basement, floor
- is_verified: boolean (default: false)
- image_urls: text[] (default: '{}')
- amenities: text[] (default: '{}')
- available_from: date (nullable)
- lease_duration: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
