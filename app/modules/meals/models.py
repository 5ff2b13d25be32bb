# Supabase table: meal_slots
# This file documents the expected database schema

"""
Expected Supabase table structure:

meal_slots:
- id: uuid (primary key)
- family_id: uuid (foreign key to families.id, not null)
- day_of_week: integer (not null, check: 0..6, 0 = Sunday)
- meal_type: text (not null) - values: breakfast, lunch, dinner
- meal_name: text (nullable)
- recipe_notes: text (nullable)
- created_at: timestamp (default: now())

There is deliberately no unique constraint on (family_id, day_of_week, meal_type);
the service looks the cell up in the loaded plan before choosing insert or update.
"""
