"""
Substitutable access to AWS-backed side effects.

Each area of external functionality (email, persistence, secrets) is exposed
as a capability value: a bundle of independently replaceable async
operations. Factories build either live (boto3-backed) or fake instances
from the same public contract.
"""

__version__ = '0.1.0'
