"""
API module - HTTP transport for the license authority.
"""
