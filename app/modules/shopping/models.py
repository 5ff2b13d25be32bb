# Supabase table: shopping_items
# This file documents the expected database schema

"""
Expected Supabase table structure:

shopping_items:
- id: uuid (primary key)
- family_id: uuid (foreign key to families.id, not null)
- name: text (not null)
- checked: boolean (not null, default: false) - true once purchased
- category: text (nullable)
- created_at: timestamp (default: now())
"""
