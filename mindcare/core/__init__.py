"""
Core domain layers: recommendation engine and safety screening.
"""
