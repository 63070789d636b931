"""
Integrations with AWS through boto3.
"""
