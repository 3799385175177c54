from abc import ABC, abstractmethod

from portal.libs.result import Result


class EmailSender(ABC):
    """Outbound transactional email port"""

    @abstractmethod
    async def send(self, to: str, subject: str, html: str) -> Result[str]:
        """Send an email; returns the provider message id, or an Error"""
        pass
