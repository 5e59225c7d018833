"""
Core modules for LLM Session.

This package contains the provider-agnostic logic: option processing,
pricing, messages and the conversation session state machine.
"""
