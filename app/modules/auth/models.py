# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Account registration (auth.users table)
# - Sign in and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_up() - Register new accounts (display name kept in user_metadata.name)
- auth.sign_in_with_password() - Authenticate accounts
- auth.get_user() - Resolve the identity behind a JWT
- auth.sign_out() - Sign out

The family member row for an identity lives in the public `users` table and
is matched by email (see app/modules/families/models.py).
"""
