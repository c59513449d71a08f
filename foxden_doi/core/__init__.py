"""DOI publication workflow."""

from foxden_doi.core.publisher import DOIPublisher, publish_dataset, update_metadata_doi
from foxden_doi.core.synchronizer import MetadataSynchronizer, RecordFailure, SyncResult, WorkflowState

__all__ = [
    'DOIPublisher', 'publish_dataset', 'update_metadata_doi',
    'MetadataSynchronizer', 'RecordFailure', 'SyncResult', 'WorkflowState',
]
