"""
Quiz Master - quiz authoring and quiz taking service
"""
__version__ = "1.0.0"
