"""Workers package for running the DOI workflow in background threads."""

from foxden_doi.workers.publish_worker import PublishWorker
from foxden_doi.workers.sync_worker import SyncWorker

__all__ = ['PublishWorker', 'SyncWorker']
