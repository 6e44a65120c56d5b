"""
HTTP Client Mock for Component Testing

Mocks httpx.AsyncClient for testing calls to external tax providers.
"""
from typing import Any, Dict, List, Optional


class MockHttpResponse:
    """Mock HTTP response"""

    def __init__(
        self,
        status_code: int = 200,
        json_data: Optional[Any] = None,
        text: str = "",
    ):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text or ("" if json_data is None else str(json_data))

    def json(self) -> Any:
        if self._json_data is None:
            raise ValueError("Response body is not JSON")
        return self._json_data


class MockHttpClient:
    """Mock for httpx.AsyncClient"""

    def __init__(self):
        self.requests: List[Dict[str, Any]] = []
        self._responses: Dict[str, MockHttpResponse] = {}
        self._default_response = MockHttpResponse(200, {})
        self._should_raise: Optional[Exception] = None
        self.closed = False

    async def post(self, url: str, **kwargs) -> MockHttpResponse:
        """Mock POST request"""
        return await self._make_request("POST", url, **kwargs)

    async def aclose(self):
        self.closed = True

    async def _make_request(self, method: str, url: str, **kwargs) -> MockHttpResponse:
        """Internal request handler"""
        self.requests.append({
            "method": method,
            "url": url,
            **kwargs
        })

        if self._should_raise:
            raise self._should_raise

        key = f"{method}:{url}"
        if key in self._responses:
            return self._responses[key]

        return self._default_response

    # Test helper methods

    def set_response(
        self,
        method: str,
        url: str,
        status_code: int = 200,
        json_data: Optional[Any] = None,
        text: str = ""
    ):
        """Set response for specific method and URL"""
        self._responses[f"{method}:{url}"] = MockHttpResponse(status_code, json_data, text)

    def set_default_response(self, status_code: int = 200, json_data: Optional[Any] = None):
        """Set default response for unmatched requests"""
        self._default_response = MockHttpResponse(status_code, json_data)

    def set_error(self, error: Exception):
        """Set an error to be raised on every request"""
        self._should_raise = error

    def get_last_request(self) -> Optional[Dict[str, Any]]:
        """Get the last recorded request"""
        return self.requests[-1] if self.requests else None

    def assert_no_requests(self):
        """Assert that no requests were made"""
        assert len(self.requests) == 0, f"Expected no requests, but got: {self.requests}"
