"""
Masterly - concept mastery tracking and learning path recommendation.
"""
