"""Route table for ``/api/contact``."""

from fastapi import APIRouter

from food_portfolio_api.handlers.contact_handler import ContactHandler


def build_contact_router(handler: ContactHandler) -> APIRouter:
    """Bind contact handlers to their paths.

    Collection routes answer both with and without a trailing slash.

    Args:
        handler: Handler instance serving the routes

    Returns:
        APIRouter: Router to mount under ``/api/contact``
    """
    router = APIRouter(tags=["Contact"])

    for path in ("", "/"):
        router.add_api_route(
            path,
            handler.submit_message,
            methods=["POST"],
            status_code=201,
            include_in_schema=not path,
        )
        # Admin listing
        router.add_api_route(
            path, handler.list_messages, methods=["GET"], include_in_schema=not path
        )

    # Admin routes
    router.add_api_route("/stats", handler.get_stats, methods=["GET"])
    router.add_api_route("/recent", handler.get_recent, methods=["GET"])
    router.add_api_route("/search", handler.search_messages, methods=["GET"])
    router.add_api_route("/{contact_id}", handler.get_message, methods=["GET"])
    router.add_api_route("/{contact_id}/status", handler.update_status, methods=["PUT"])
    router.add_api_route("/{contact_id}", handler.delete_message, methods=["DELETE"])

    return router
