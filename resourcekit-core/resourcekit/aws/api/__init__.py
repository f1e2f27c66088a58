"""
Shapes of the AWS API structures used by resourcekit. Mirrors the botocore service models, requests and responses
are plain dicts as handled by boto3.
"""
