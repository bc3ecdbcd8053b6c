"""Application services."""

from rfp_desk.services.transfer import TransferService

__all__ = ["TransferService"]
