"""
Boards API route handlers.

Handlers use resource-path-based naming:
- boards_images_transfer_post.py: POST /boards/images/transfer
"""

from . import boards_images_transfer_post


def register_all_routes(app):
    """Register every Boards API route on the resolver."""
    boards_images_transfer_post.register_route(app)
