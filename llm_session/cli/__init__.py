"""
Command-line interface for LLM Session.
"""
