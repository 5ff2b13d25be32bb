# Supabase table: chores
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

chores:
- id: uuid (primary key)
- family_id: uuid (foreign key to families.id, not null)
- title: text (not null)
- description: text (nullable)
- assigned_to: uuid (foreign key to users.id, nullable, on delete set null)
- points: integer (not null, default: 10, check: points >= 0)
- status: text (not null, default: 'open') - values: open, in_progress, completed
- due_date: date (nullable)
- completed_at: timestamp (nullable) - set iff status = 'completed'
- created_at: timestamp (default: now())
"""
