"""Mock objects for releasegit testing."""

from tests.mocks.mock_runner import MockCommandRunner, MockLogRecordStream, RecordedCall

__all__ = [
    "MockCommandRunner",
    "MockLogRecordStream",
    "RecordedCall",
]
