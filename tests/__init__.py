"""
This __init__.py file is kept in the root tests directory while test subdirectories
stay without one.

It makes pytest treat tests/ as a package, so the shared fixtures in conftest.py
and test modules resolve the same way in every environment.
"""
