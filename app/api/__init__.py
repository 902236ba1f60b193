"""
Endpoints HTTP.
"""
