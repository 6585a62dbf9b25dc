import io
import json
from typing import Optional

import pytest

from response_envelope import JsonLogger, ResponseFinalizer, ResponseSettings, S3URLResolver

SIGNED_URL = "https://s3.amazonaws.com/my-test-bucket/test/test.txt?AWSAccessKeyId=AKXYZ&Expires=1534290845&Signature=XYZ"


class FakeSigner:
    def __init__(self, url: str = SIGNED_URL, error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.calls = []

    def get_signed_url(self, operation: str, params: dict) -> str:
        self.calls.append((operation, dict(params)))
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def logger(log_stream):
    return JsonLogger(correlation_id="test", stream=log_stream)


@pytest.fixture
def signer():
    return FakeSigner()


@pytest.fixture
def finalizer(signer, logger):
    return ResponseFinalizer(S3URLResolver(signer), logger=logger)


@pytest.fixture
def cb_finalizer(signer, logger):
    return ResponseFinalizer(S3URLResolver(signer), settings=ResponseSettings(jsonp_callback_params=("cb",)), logger=logger)


@pytest.fixture
def read_logs(log_stream):
    def _read():
        return [json.loads(line) for line in log_stream.getvalue().splitlines() if line]
    return _read
