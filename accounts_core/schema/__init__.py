"""Database schema for Accounts Core.

schema.sql in this directory is the source of truth for the user table.
"""
