"""
SkillForge learning platform
"""
