"""Attachment encoding and resolution."""

from rfp_desk.attachments.resolver import AttachmentResolver, ResourceHandle

__all__ = ["AttachmentResolver", "ResourceHandle"]
