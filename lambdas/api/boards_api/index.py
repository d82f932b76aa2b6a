"""
Boards API Lambda Handler.

This is the main entry point for the Boards API Lambda function.
It uses AWS Lambda Powertools APIGatewayRestResolver for routing
board endpoints to their respective handlers.

All handlers are defined in the handlers/ directory with resource-path-based naming:
- boards_images_transfer_post.py: POST /boards/images/transfer

Request validation is handled by Pydantic V2 models in the models/ directory.
"""

import json
import os
from typing import Any, Dict

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

# Import PynamoDB models
from db_models import BoardModel, ImageModel

# Initialize PowerTools
logger = Logger(service="boards-api", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="boards-api")
metrics = Metrics(namespace="medialake", service="boards-api")

# Configure CORS
cors_config = CORSConfig(
    allow_origin="*",
    allow_headers=[
        "Content-Type",
        "X-Amz-Date",
        "Authorization",
        "X-Api-Key",
        "X-Amz-Security-Token",
        "X-Client-Info",
    ],
    expose_headers=["X-Request-Id"],
    max_age=300,
)

# Initialize API Gateway resolver with CORS
app = APIGatewayRestResolver(
    serializer=lambda x: json.dumps(x, default=str),
    strip_prefixes=["/api"],
    cors=cors_config,
)

# Initialize PynamoDB models with environment configuration
table_name = os.environ.get("BOARDS_TABLE_NAME", "boards_table_dev")
region = os.environ.get("AWS_REGION", "us-east-1")

for model in [BoardModel, ImageModel]:
    model.Meta.table_name = table_name
    model.Meta.region = region

logger.info(f"PynamoDB models initialized for table: {table_name} in region: {region}")

# Register all routes - import is done after model initialization
from handlers import register_all_routes  # noqa: E402

register_all_routes(app)


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler for Boards API.

    Args:
        event: API Gateway Lambda proxy integration event
        context: Lambda context object

    Returns:
        API Gateway Lambda proxy integration response
    """
    logger.info(
        "Boards API Lambda invoked",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "resource": event.get("resource"),
        },
    )

    try:
        return app.resolve(event, context)
    except Exception as e:
        logger.exception("Unhandled exception in Boards API", exc_info=e)
        return {
            "statusCode": 500,
            "body": json.dumps(
                {
                    "error": "InternalServerError",
                    "message": "An unexpected error occurred",
                    "meta": {
                        "request_id": event.get("requestContext", {}).get("requestId")
                    },
                }
            ),
        }
