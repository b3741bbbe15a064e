"""
Command modules for the repokit CLI.
"""
