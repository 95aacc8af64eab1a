import copy

import pytest

from bingtiles.exceptions import MetadataFetchError


class FakeFetcher:
    """
    同步的元数据请求器：fetch 时直接调用回调，或者挂起等待手动触发
    """

    def __init__(self, response=None, error=None, deferred=False):
        self.response = response
        self.error = error
        self.deferred = deferred
        self.urls = []
        self.callback = None
        self.errback = None

    def fetch(self, url, callback, errback=None):
        self.urls.append(url)
        self.callback = callback
        self.errback = errback
        if not self.deferred:
            self.deliver()

    def deliver(self):
        if self.error is not None:
            self.errback(self.error)
        else:
            self.callback(self.response)

    def close(self):
        pass


class DummyResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.closed = False

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload

    def close(self):
        self.closed = True


class DummySession:
    """
    代替 requests.Session，返回固定响应或抛出固定异常
    """

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append({"url": url, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


SAMPLE_RESOURCE = {
    "imageUrl": "https://{subdomain}.ssl.ak.dynamic.tiles.virtualearth.net/tiles/a{quadkey}.jpeg?g=1&mkt={culture}",
    "imageUrlSubdomains": ["t0", "t1"],
    "imageWidth": 256,
    "imageHeight": 256,
    "zoomMin": 1,
    "zoomMax": 19,
}

SAMPLE_PROVIDERS = [
    {
        "attribution": "© 2024 Microsoft Corporation",
        "coverageAreas": [{"bbox": [-90, -180, 90, 180], "zoomMin": 1, "zoomMax": 21}],
    },
    {
        "attribution": "© 2024 Maxar",
        "coverageAreas": [
            {"bbox": [-60, -180, -50, -170], "zoomMin": 1, "zoomMax": 21},
            {"bbox": [30, 100, 50, 130], "zoomMin": 5, "zoomMax": 10},
        ],
    },
    {
        "attribution": "© Europe Only",
        "coverageAreas": [{"bbox": [35, -10, 70, 40], "zoomMin": 1, "zoomMax": 21}],
    },
]


def make_response(resource=None, providers=None, **overrides):
    resource = copy.deepcopy(resource or SAMPLE_RESOURCE)
    if providers is not None:
        resource["imageryProviders"] = copy.deepcopy(providers)
    response = {
        "statusCode": 200,
        "statusDescription": "OK",
        "authenticationResultCode": "ValidCredentials",
        "resourceSets": [{"estimatedTotal": 1, "resources": [resource]}],
    }
    response.update(overrides)
    return response


@pytest.fixture
def response():
    return make_response(providers=SAMPLE_PROVIDERS)


@pytest.fixture
def transport_error():
    return MetadataFetchError("元数据请求超时")
