# Supabase Auth
# Registration, login and JWT validation go through Supabase's built-in auth.
# No custom auth tables are required.

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (name and is_landlord go into user_metadata)
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

A database trigger copies user_metadata into the public profiles table on
sign up; see modules/profiles/models.py for that table.
"""
