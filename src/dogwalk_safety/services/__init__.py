"""
Shared infrastructure.

- http.py - ``requests`` session factory with retry and default timeout
"""
