"""Presign API: issues time-limited upload URLs for an S3 bucket."""
