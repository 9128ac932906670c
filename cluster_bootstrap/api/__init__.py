"""
FastAPI server for cluster-bootstrap

Provides the application factory and health endpoints.
"""

from cluster_bootstrap.api.app import create_app

__all__ = ["create_app"]
