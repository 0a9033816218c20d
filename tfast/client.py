import requests
import urllib3
from requests.adapters import HTTPAdapter

__all__ = ["get_default_session", "skip_insecure_tls_verification"]

_default_session = requests.Session()


class InsecureHTTPAdapter(HTTPAdapter):
    """HTTP adapter that never verifies certificates.

    requests lets REQUESTS_CA_BUNDLE and CURL_CA_BUNDLE override
    Session.verify, so verification is switched off per request instead.
    """

    def send(self, request, **kwargs):
        """Send the request without certificate verification."""
        kwargs["verify"] = False
        return super().send(request, **kwargs)


def get_default_session() -> requests.Session:
    """Get the process-wide default HTTP session.

    Returns:
        requests.Session: the default session
    """
    return _default_session


def skip_insecure_tls_verification():
    """Disable certificate verification on the default session.

    This allows requests to servers using self-signed certificates (such as
    the bundled localhost certificate) without any trust configuration,
    regardless of CA bundle environment variables. Only use this in tests.
    """
    _default_session.verify = False
    _default_session.mount("https://", InsecureHTTPAdapter())
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
