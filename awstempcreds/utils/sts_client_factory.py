# awstempcreds/utils/sts_client_factory.py

"""
Factory for creating boto3 STS clients. Base credentials come from the usual
boto3 chain (environment, shared config, instance role).
"""
import boto3


def get_sts_client(region: str):
    return boto3.client("sts", region_name=region)
