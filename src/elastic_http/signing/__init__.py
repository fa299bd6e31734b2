"""
Request signing module
"""

from elastic_http.signing.aws_signer import AwsSigner

__all__ = ["AwsSigner"]
