"""
Infrastructure helpers
"""
