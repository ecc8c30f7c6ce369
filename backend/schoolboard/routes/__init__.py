"""HTTP routes for the SchoolBoard API."""

from .organization_routes import create_organization_routes
from .assessment_routes import create_assessment_routes
from .result_routes import create_result_routes, get_ranking_engine
from .feature_routes import create_feature_routes, get_feature_service

__all__ = [
    "create_organization_routes",
    "create_assessment_routes",
    "create_result_routes",
    "create_feature_routes",
    "get_ranking_engine",
    "get_feature_service",
]
