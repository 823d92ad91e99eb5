"""Route table for ``/api/portfolio``."""

from fastapi import APIRouter

from food_portfolio_api.handlers.portfolio_handler import PortfolioHandler


def build_portfolio_router(handler: PortfolioHandler) -> APIRouter:
    """Bind portfolio handlers to their paths.

    Fixed paths are registered before ``/{dish_id}`` so they are not
    captured as ids. Collection routes answer both with and without a
    trailing slash.

    Args:
        handler: Handler instance serving the routes

    Returns:
        APIRouter: Router to mount under ``/api/portfolio``
    """
    router = APIRouter(tags=["Portfolio"])

    router.add_api_route("/stats", handler.get_stats, methods=["GET"])
    router.add_api_route("/categories", handler.get_categories, methods=["GET"])
    for path in ("", "/"):
        router.add_api_route(
            path, handler.list_dishes, methods=["GET"], include_in_schema=not path
        )
        router.add_api_route(
            path,
            handler.create_dish,
            methods=["POST"],
            status_code=201,
            include_in_schema=not path,
        )
    router.add_api_route("/{dish_id}", handler.get_dish, methods=["GET"])
    router.add_api_route("/{dish_id}", handler.update_dish, methods=["PUT"])
    router.add_api_route("/{dish_id}", handler.delete_dish, methods=["DELETE"])

    return router
