"""
Core services: session, guard, attempts, scoring, analytics, catalog
"""
