"""
Persistence adapters.

Services depend on SQLRepository instead of opening sessions themselves.
"""
