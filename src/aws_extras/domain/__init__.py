"""
Domain layer for the AWS capability wrappers.

This layer contains:
- Data models (email message parts, secrets)
- Error types (secret validation, configuration)
"""
