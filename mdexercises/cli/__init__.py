"""
Command-line interface for mdexercises.

Entry point: mdexercises.cli.main:main
"""
