"""
MindCare assessment service: scripted intake questionnaires, severity
scoring and therapy-plan recommendation.
"""
__version__ = "1.0.0"
