"""
User authentication utilities for board Lambda functions.

This module resolves the calling user from the Cognito claims that the
API Gateway authorizer attaches to every proxied request. The bearer
credential itself is verified by the authorizer; by the time a Lambda runs,
a valid credential shows up as a ``sub`` claim and anything else means the
request is unauthenticated.
"""

import json
from typing import Any, Dict, Optional

from aws_lambda_powertools import Logger, Tracer

# Initialize PowerTools
logger = Logger(service="user-auth")
tracer = Tracer(service="user-auth")


class UnauthenticatedError(Exception):
    """Raised when no caller identity can be resolved from the event."""

    error_code = "Unauthenticated"
    status_code = 401

    def __init__(self, message: str = "Valid authentication is required"):
        super().__init__(message)
        self.message = message


def _load_claims(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Return the authorizer claims of an API Gateway event, or None."""
    if not isinstance(event, dict):
        return None

    request_context = event.get("requestContext")
    if not isinstance(request_context, dict):
        logger.debug(
            {
                "message": "No valid requestContext found",
                "request_context_type": type(request_context).__name__,
                "operation": "load_claims",
            }
        )
        return None

    authorizer = request_context.get("authorizer")
    if not isinstance(authorizer, dict):
        logger.debug(
            {
                "message": "No valid authorizer found",
                "authorizer_type": type(authorizer).__name__,
                "operation": "load_claims",
            }
        )
        return None

    claims = authorizer.get("claims")

    # Handle claims as either dict or JSON string
    if isinstance(claims, str):
        try:
            claims = json.loads(claims)
        except ValueError as e:
            logger.warning(
                {
                    "message": "Failed to parse claims JSON string",
                    "error": str(e),
                    "claims_preview": claims[:200],
                    "operation": "load_claims",
                }
            )
            return None

    if not isinstance(claims, dict):
        logger.debug(
            {
                "message": "Claims is neither dict nor string",
                "claims_type": type(claims).__name__,
                "operation": "load_claims",
            }
        )
        return None

    return claims


@tracer.capture_method
def extract_user_context(event: Dict[str, Any]) -> Dict[str, Optional[str]]:
    """
    Extract user information from JWT claims in the event context.

    Never raises; missing or malformed claims produce ``None`` values.

    Args:
        event: Lambda event from API Gateway

    Returns:
        Dictionary with user_id and username

    Example:
        >>> user_context = extract_user_context(event)
        >>> user_id = user_context.get("user_id")
    """
    claims = _load_claims(event) or {}

    user_id = claims.get("sub") or None
    username = claims.get("cognito:username") or None

    logger.debug(
        {
            "message": "User context extracted",
            "user_id": user_id,
            "username": username,
            "operation": "extract_user_context",
        }
    )

    return {"user_id": user_id, "username": username}


@tracer.capture_method
def resolve_caller_id(event: Dict[str, Any]) -> str:
    """
    Resolve the id of the authenticated caller.

    Args:
        event: Lambda event from API Gateway

    Returns:
        The caller's user id (the ``sub`` claim)

    Raises:
        UnauthenticatedError: if the event carries no usable identity
    """
    user_id = extract_user_context(event).get("user_id")

    if not isinstance(user_id, str) or not user_id.strip():
        logger.warning(
            {
                "message": "Authentication required but no valid user found",
                "operation": "resolve_caller_id",
            }
        )
        raise UnauthenticatedError()

    return user_id


def is_resource_owner(user_id: str, resource_owner_id: Optional[str]) -> bool:
    """Check if a user is the owner of a resource."""
    return bool(user_id) and user_id == resource_owner_id
