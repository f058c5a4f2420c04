"""
OAuth Audit and Rate Limiting
"""
