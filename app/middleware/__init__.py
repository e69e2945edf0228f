"""
HTTP middleware chain
"""
