# Supabase tables: families, users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

families:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null, check: length(trim(name)) > 0)
- created_at: timestamp (default: now())

users (family members; one row per person, linked to an auth identity by email):
- id: uuid (primary key, default: gen_random_uuid())
- email: text (unique, not null) - unique so that provisioning is idempotent
- name: text (not null)
- role: text (not null, check: role in ('parent', 'child'))
- family_id: uuid (foreign key to families.id, nullable)
- onboarding_completed: boolean (not null, default: false)
- created_at: timestamp (default: now())

Members added by a parent get a placeholder email (<name>.<8 hex>@family.local) when
none is supplied; they never sign in.
"""
