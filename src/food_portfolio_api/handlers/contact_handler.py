"""Request handlers for the contact message endpoints."""

import asyncio
import logging

from fastapi import Query
from fastapi.responses import JSONResponse

from food_portfolio_api.handlers.responses import (
    error_response,
    handle_unexpected_errors,
    store_error_response,
    success_response,
)
from food_portfolio_api.models.contact_models import (
    ContactCreate,
    ContactStatus,
    ContactStatusUpdate,
    is_valid_email,
)
from food_portfolio_api.repositories.contact_repository import ContactRepository
from food_portfolio_api.repositories.results import UpdateOutcome

logger = logging.getLogger(__name__)

VALID_STATUSES = ", ".join(status.value for status in ContactStatus)


class ContactHandler:
    """Handlers for ``/api/contact``.

    Submission is public; the remaining endpoints are admin views and are
    not authenticated.
    """

    def __init__(self, contact_repository: ContactRepository) -> None:
        """Initialize handler.

        Args:
            contact_repository: Repository for contact messages
        """
        self.contact_repository = contact_repository

    @handle_unexpected_errors
    async def submit_message(self, payload: ContactCreate) -> JSONResponse:
        """Accept a contact form submission.

        Args:
            payload: Form fields; name, email and message are required

        Returns:
            JSONResponse: 201 with a summary of the stored message
        """
        if not payload.name or not payload.email or not payload.message:
            return error_response(400, "Name, email, and message are required")

        if not is_valid_email(payload.email):
            return error_response(400, "Please provide a valid email address")

        result = await self.contact_repository.create(payload)
        if result.error is not None:
            return store_error_response("Error submitting contact form", result.error)

        contact = result.data
        logger.info(f"Contact message received: {contact.id}")
        return success_response(
            201,
            message="Thank you for your message! We will get back to you soon.",
            data={
                "id": contact.id,
                "name": contact.name,
                "email": contact.email,
                "created_at": contact.created_at,
            },
        )

    @handle_unexpected_errors
    async def list_messages(
        self,
        status: ContactStatus | None = None,
        limit: int = Query(50, ge=0),
        offset: int = Query(0, ge=0),
    ) -> JSONResponse:
        """List messages with in-memory pagination.

        Args:
            status: Restrict to one status
            limit: Page size
            offset: Number of messages to skip

        Returns:
            JSONResponse: ``{success, data, pagination}``
        """
        if status:
            result = await self.contact_repository.get_by_status(status)
        else:
            result = await self.contact_repository.get_all()

        if result.error is not None:
            return store_error_response("Error fetching contact messages", result.error)

        messages = result.data or []
        end = offset + limit
        return success_response(
            data=messages[offset:end],
            pagination={
                "total": len(messages),
                "limit": limit,
                "offset": offset,
                "has_more": end < len(messages),
            },
        )

    @handle_unexpected_errors
    async def get_message(self, contact_id: str) -> JSONResponse:
        result = await self.contact_repository.get_by_id(contact_id)
        if result.error is not None:
            return store_error_response("Error fetching contact message", result.error)
        if result.data is None:
            return error_response(404, "Contact message not found")
        return success_response(data=result.data)

    @handle_unexpected_errors
    async def update_status(self, contact_id: str, payload: ContactStatusUpdate) -> JSONResponse:
        """Move a message to another status.

        Args:
            contact_id: Message identifier
            payload: Body carrying the new status

        Returns:
            JSONResponse: 400 for a status outside the enum, 404 for an unknown id
        """
        try:
            status = ContactStatus(payload.status)
        except ValueError:
            return error_response(400, f"Invalid status. Must be one of: {VALID_STATUSES}")

        result = await self.contact_repository.update_status(contact_id, status)

        if result.outcome == UpdateOutcome.FAILED:
            return store_error_response("Error updating message status", result.error)
        if result.outcome == UpdateOutcome.NOT_FOUND:
            return error_response(404, "Contact message not found")

        return success_response(message="Message status updated successfully", data=result.record)

    @handle_unexpected_errors
    async def delete_message(self, contact_id: str) -> JSONResponse:
        result = await self.contact_repository.delete(contact_id)
        if result.error is not None:
            return store_error_response("Error deleting message", result.error)
        return success_response(message="Message deleted successfully")

    @handle_unexpected_errors
    async def get_recent(self, days: int = Query(30, ge=0)) -> JSONResponse:
        result = await self.contact_repository.get_recent(days)
        if result.error is not None:
            return store_error_response("Error fetching recent messages", result.error)

        messages = result.data or []
        return success_response(data=messages, count=len(messages), days=days)

    @handle_unexpected_errors
    async def search_messages(self, q: str | None = None) -> JSONResponse:
        if not q:
            return error_response(400, "Search term is required")

        result = await self.contact_repository.search(q)
        if result.error is not None:
            return store_error_response("Error searching messages", result.error)

        messages = result.data or []
        return success_response(data=messages, count=len(messages), search_term=q)

    @handle_unexpected_errors
    async def get_stats(self) -> JSONResponse:
        """Summarize the inbox.

        Returns:
            JSONResponse: totals, new and last-30-days counts, and a
            per-status count over all messages
        """
        all_messages, new_messages, recent_messages = await asyncio.gather(
            self.contact_repository.get_all(),
            self.contact_repository.get_by_status(ContactStatus.NEW),
            self.contact_repository.get_recent(30),
        )

        for result in (all_messages, new_messages, recent_messages):
            if result.error is not None:
                return store_error_response("Error fetching contact statistics", result.error)

        status_breakdown = {status.value: 0 for status in ContactStatus}
        for message in all_messages.data:
            status_breakdown[message.status.value] += 1

        stats = {
            "total_messages": len(all_messages.data),
            "new_messages": len(new_messages.data),
            "recent_messages": len(recent_messages.data),
            "status_breakdown": status_breakdown,
        }
        return success_response(data=stats)
