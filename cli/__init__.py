"""Console front end of the Library Management System"""
from .main import cli

__all__ = ['cli']
