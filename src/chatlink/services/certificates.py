from typing import Optional

from chatlink.clients.collaborators import FilePicker
from chatlink.errors import PickerCancelled
from chatlink.logger import get_logger
from chatlink.models import Certificate

logger = get_logger(__name__)


class CertificateSelector:
    """
    Holds the client certificate picked for the current bootstrap attempt.

    The certificate is not persisted here; it travels on the ConnectionIntent and
    the connection manager decides what to keep.
    """

    def __init__(self, file_picker: FilePicker):
        if file_picker is None:
            raise ValueError("A file picker is required.")
        self.file_picker = file_picker
        self._certificate: Optional[Certificate] = None

    @property
    def certificate(self) -> Optional[Certificate]:
        return self._certificate

    async def pick(self) -> Optional[Certificate]:
        """
        Ask the file picker for a certificate.

        Cancelling or a picker error keeps the previous certificate.

        Returns:
            Optional[Certificate]: The certificate selected after the call.
        """
        try:
            picked = await self.file_picker.pick_certificate_file()
        except PickerCancelled:
            logger.debug("Certificate picker dismissed")
            return self._certificate
        except Exception as e:
            logger.warning(f"Certificate picker failed: {e}")
            return self._certificate

        if picked is None:
            logger.debug("Certificate picker dismissed")
            return self._certificate

        self.save(picked)
        return self._certificate

    def save(self, certificate: Certificate) -> None:
        self._certificate = certificate
        logger.info(f"Certificate selected: {certificate.display_name}")

    def clear(self) -> None:
        # The picked file is a temporary copy owned by the picker; nothing to delete.
        self._certificate = None


__all__ = ["CertificateSelector"]
