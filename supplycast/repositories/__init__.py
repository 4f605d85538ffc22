"""
Database access functions
"""
