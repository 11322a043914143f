"""
Database module for the Eduverse portal

Contains seed data and database utilities.
"""
from eduverse.db.seed_data import seed_all, clear_all

__all__ = ["seed_all", "clear_all"]
