"""Worker thread for publishing a dataset with a DOI provider."""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from foxden_doi.core.publisher import DOIPublisher
from foxden_doi.errors import FoxdenDOIError
from foxden_doi.utils.config import Config


logger = logging.getLogger(__name__)


class PublishWorker(QObject):
    """Runs ``DOIPublisher.publish_dataset`` off the caller's thread."""

    # Signals
    progress_update = Signal(str)  # message
    finished = Signal(str, str, str)  # did, doi, doi_link
    error_occurred = Signal(str, str)  # did, error_message

    def __init__(
        self,
        config: Config,
        user: str,
        provider: str,
        did: str,
        description: str,
        publisher: Optional[DOIPublisher] = None
    ):
        """
        Initialize the publish worker.

        Args:
            config: Workflow configuration
            user: User the dataset is published for
            provider: DOI provider name
            did: Dataset identifier
            description: Human description of the dataset
            publisher: Publisher to use (built from config when omitted)
        """
        super().__init__()
        self.config = config
        self.user = user
        self.provider = provider
        self.did = did
        self.description = description
        self.publisher = publisher

    def run(self):
        """Publish the dataset and emit the minted DOI or the error."""
        try:
            publisher = self.publisher or DOIPublisher(self.config)
            self.progress_update.emit(f"Publishing {self.did} with {self.provider}...")
            result = publisher.publish_dataset(self.user, self.provider, self.did, self.description)
        except FoxdenDOIError as e:
            error_msg = f"Publishing {self.did} failed: {str(e)}"
            logger.error(error_msg)
            self.error_occurred.emit(self.did, error_msg)
            return
        except Exception as e:
            error_msg = f"Unexpected error publishing {self.did}: {str(e)}"
            logger.exception(error_msg)
            self.error_occurred.emit(self.did, error_msg)
            return

        self.progress_update.emit(f"[OK] {self.did} published as {result.doi}")
        self.finished.emit(self.did, result.doi, result.doi_link)
