"""Route table for ``/api/chatbot``."""

from fastapi import APIRouter

from food_portfolio_api.handlers.chatbot_handler import ChatbotHandler


def build_chatbot_router(handler: ChatbotHandler) -> APIRouter:
    router = APIRouter(tags=["Chatbot"])

    router.add_api_route("/chat", handler.chat, methods=["POST"])
    router.add_api_route("/recommend", handler.recommend, methods=["POST"])
    router.add_api_route("/cooking-tip", handler.cooking_tip, methods=["POST"])
    router.add_api_route("/status", handler.get_status, methods=["GET"])
    router.add_api_route("/test", handler.test_connection, methods=["GET"])
    router.add_api_route("/history", handler.get_history, methods=["GET"])

    return router
