"""
COPS PRAJA - timed multiple-choice exam
"""
__version__ = '1.0.0'
