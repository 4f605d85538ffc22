"""
Configuration, database, security and scheduling infrastructure
"""
