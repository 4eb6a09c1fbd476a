"""
S3 Fakes
========
In-memory stand-in for an aioboto3 session so the object store can be
exercised without a bucket. Missing keys raise real botocore ClientErrors
shaped like the ones S3 sends back.
"""
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError


BASE_URL = "http://base-url.com"
BUCKET = "test-bucket"


def client_error(code: str, status_code: int, operation: str) -> ClientError:
    """Build a ClientError the way botocore parses an S3 error response"""
    return ClientError(
        {
            "Error": {"Code": code, "Message": code},
            "ResponseMetadata": {"HTTPStatusCode": status_code},
        },
        operation,
    )


def response(status_code: int, **fields: Any) -> Dict[str, Any]:
    return {"ResponseMetadata": {"HTTPStatusCode": status_code}, **fields}


class FakeBody:
    """Async streaming body, optionally failing mid-read"""

    def __init__(self, data: bytes, error: Optional[Exception] = None):
        self._data = data
        self._error = error
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True

    async def read(self) -> bytes:
        if self._error is not None:
            raise self._error
        return self._data


class InMemoryS3:
    """Bucket-less fake of the four S3 calls the client makes"""

    def __init__(self):
        self.objects: Dict[tuple, Dict[str, Any]] = {}
        self.calls: List[tuple] = []

    async def put_object(self, **params):
        self.calls.append(("put_object", params))
        self.objects[(params["Bucket"], params["Key"])] = params
        return response(200, ETag='"etag"')

    async def get_object(self, Bucket, Key):
        self.calls.append(("get_object", {"Bucket": Bucket, "Key": Key}))
        stored = self.objects.get((Bucket, Key))
        if stored is None:
            raise client_error("NoSuchKey", 404, "GetObject")
        return response(200, Body=FakeBody(stored["Body"]))

    async def delete_object(self, Bucket, Key):
        self.calls.append(("delete_object", {"Bucket": Bucket, "Key": Key}))
        self.objects.pop((Bucket, Key), None)
        return response(204)

    async def head_object(self, Bucket, Key):
        self.calls.append(("head_object", {"Bucket": Bucket, "Key": Key}))
        if (Bucket, Key) not in self.objects:
            raise client_error("404", 404, "HeadObject")
        return response(200, ContentLength=len(self.objects[(Bucket, Key)]["Body"]))


class _ClientContext:
    def __init__(self, s3):
        self._s3 = s3

    async def __aenter__(self):
        return self._s3

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Mimics aioboto3.Session().client(...) as an async context manager"""

    def __init__(self, s3):
        self.s3 = s3
        self.client_calls: List[tuple] = []

    def client(self, service_name: str, **kwargs):
        self.client_calls.append((service_name, kwargs))
        return _ClientContext(self.s3)


