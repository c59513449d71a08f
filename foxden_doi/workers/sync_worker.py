"""Worker thread for writing a minted DOI into MetaData records."""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from foxden_doi.core.publisher import DOIPublisher
from foxden_doi.errors import FoxdenDOIError
from foxden_doi.utils.config import Config


logger = logging.getLogger(__name__)


class SyncWorker(QObject):
    """Runs ``DOIPublisher.update_metadata_doi`` off the caller's thread."""

    # Signals
    progress_update = Signal(str)  # message
    finished = Signal(int, int, list)  # updated_count, failed_count, error_list
    error_occurred = Signal(str)  # error_message

    def __init__(
        self,
        config: Config,
        did: str,
        doi: str,
        doi_link: str,
        fail_fast: bool = False,
        publisher: Optional[DOIPublisher] = None
    ):
        super().__init__()
        self.config = config
        self.did = did
        self.doi = doi
        self.doi_link = doi_link
        self.fail_fast = fail_fast
        self.publisher = publisher

    def run(self):
        """
        Propagate the DOI and emit per-call results.

        Rejected records end up in the error list of ``finished``; a failure
        that aborts the whole update is reported through ``error_occurred``
        followed by ``finished`` so listeners can clean up.
        """
        try:
            publisher = self.publisher or DOIPublisher(self.config)
            self.progress_update.emit(f"Updating MetaData records of {self.did}...")
            result = publisher.update_metadata_doi(self.did, self.doi, self.doi_link, fail_fast=self.fail_fast)
        except FoxdenDOIError as e:
            error_msg = f"MetaData update for {self.did} failed: {str(e)}"
            logger.error(error_msg)
            self.error_occurred.emit(error_msg)
            self.finished.emit(0, 0, [])
            return
        except Exception as e:
            error_msg = f"Unexpected error updating MetaData records of {self.did}: {str(e)}"
            logger.exception(error_msg)
            self.error_occurred.emit(error_msg)
            self.finished.emit(0, 0, [])
            return

        error_list = [f"record {failure.index}: {failure.message}" for failure in result.failures]
        self.progress_update.emit(
            f"MetaData update for {self.did}: {result.updated} updated, {len(result.failures)} failed"
        )
        self.finished.emit(result.updated, len(result.failures), error_list)
