"""Tests for the publish and sync workers."""

from unittest.mock import Mock

import pytest

from foxden_doi.api.providers import ProviderResult
from foxden_doi.core.synchronizer import RecordFailure, SyncResult
from foxden_doi.errors import SchemaConflictError, UnsupportedProviderError
from foxden_doi.workers.publish_worker import PublishWorker
from foxden_doi.workers.sync_worker import SyncWorker


DID = "beamline=id1a3/experiment=42"


class TestPublishWorker:
    """Test suite for PublishWorker."""

    @pytest.fixture
    def publisher(self):
        return Mock()

    def test_worker_run_success(self, config, publisher):
        """Test that a successful run emits progress and the minted DOI."""
        publisher.publish_dataset.return_value = ProviderResult("10.5072/abc123", "https://doi.org/10.5072/abc123")
        worker = PublishWorker(config, "alice", "zenodo", DID, "desc", publisher=publisher)

        progress, finished, errors = [], [], []
        worker.progress_update.connect(lambda *args: progress.append(args))
        worker.finished.connect(lambda *args: finished.append(args))
        worker.error_occurred.connect(lambda *args: errors.append(args))

        worker.run()

        publisher.publish_dataset.assert_called_once_with("alice", "zenodo", DID, "desc")
        assert finished == [(DID, "10.5072/abc123", "https://doi.org/10.5072/abc123")]
        assert errors == []
        assert len(progress) == 2

    def test_worker_run_error(self, config, publisher):
        """Test that a workflow error is emitted through error_occurred."""
        publisher.publish_dataset.side_effect = UnsupportedProviderError("globus")
        worker = PublishWorker(config, "alice", "globus", DID, "desc", publisher=publisher)

        finished, errors = [], []
        worker.finished.connect(lambda *args: finished.append(args))
        worker.error_occurred.connect(lambda *args: errors.append(args))

        worker.run()

        assert finished == []
        assert len(errors) == 1
        assert errors[0][0] == DID
        assert "globus" in errors[0][1]

    def test_worker_run_unexpected_error(self, config, publisher):
        """Test that an unexpected exception still reaches error_occurred."""
        publisher.publish_dataset.side_effect = AttributeError("'NoneType' object has no attribute 'get'")
        worker = PublishWorker(config, "alice", "datacite", DID, "desc", publisher=publisher)

        finished, errors = [], []
        worker.finished.connect(lambda *args: finished.append(args))
        worker.error_occurred.connect(lambda *args: errors.append(args))

        worker.run()

        assert finished == []
        assert len(errors) == 1
        assert errors[0][0] == DID
        assert "Unexpected error" in errors[0][1]


class TestSyncWorker:
    """Test suite for SyncWorker."""

    def test_worker_run_with_failures(self, config):
        """Test that rejected records are reported in the finished error list."""
        publisher = Mock()
        publisher.update_metadata_doi.return_value = SyncResult(
            did=DID,
            total=3,
            updated=2,
            failures=[RecordFailure(did=DID, index=1, message="invalid record")]
        )
        worker = SyncWorker(config, DID, "10.5072/x", "https://doi.org/10.5072/x", publisher=publisher)

        finished = []
        worker.finished.connect(lambda *args: finished.append(args))

        worker.run()

        publisher.update_metadata_doi.assert_called_once_with(
            DID, "10.5072/x", "https://doi.org/10.5072/x", fail_fast=False
        )
        assert finished == [(2, 1, ["record 1: invalid record"])]

    def test_worker_run_fatal_error(self, config):
        """Test that an aborting error emits error_occurred followed by finished."""
        publisher = Mock()
        publisher.update_metadata_doi.side_effect = SchemaConflictError(
            "multiple schemas", did="beamline=a,b", schema="a,b"
        )
        worker = SyncWorker(config, "beamline=a,b", "10.5072/x", "https://doi.org/10.5072/x", publisher=publisher)

        finished, errors = [], []
        worker.finished.connect(lambda *args: finished.append(args))
        worker.error_occurred.connect(lambda *args: errors.append(args))

        worker.run()

        assert len(errors) == 1
        assert "multiple schemas" in errors[0][0]
        assert finished == [(0, 0, [])]

    def test_worker_run_unexpected_error(self, config):
        """Test that an unexpected exception emits error_occurred and finished."""
        publisher = Mock()
        publisher.update_metadata_doi.side_effect = RuntimeError("worker crashed")
        worker = SyncWorker(config, DID, "10.5072/x", "https://doi.org/10.5072/x", publisher=publisher)

        finished, errors = [], []
        worker.finished.connect(lambda *args: finished.append(args))
        worker.error_occurred.connect(lambda *args: errors.append(args))

        worker.run()

        assert len(errors) == 1
        assert "worker crashed" in errors[0][0]
        assert finished == [(0, 0, [])]
