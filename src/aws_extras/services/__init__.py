"""
Capability values for AWS-backed side effects.

Each module exposes a capability value (a frozen bundle of async operations)
and a factory creating its live implementation.
"""

__all__ = ['attributes', 'email_sender', 'persistence', 'secrets_manager', 'timestamp']
