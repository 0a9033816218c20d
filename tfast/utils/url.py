def format_base_url(scheme: str, host: str, port: int) -> str:
    """Build the base URL of a server.

    IPv6 hosts are enclosed in brackets.

    Args:
        scheme (str): "http" or "https"
        host (str): the IP address or host name
        port (int): the port number

    Returns:
        str: the base URL, e.g. "http://127.0.0.1:53262"
    """
    if ":" in host:
        host = f"[{host}]"
    return f"{scheme}://{host}:{port}"


def absolute_url(base_url: str, path: str) -> str:
    """Construct an absolute URL from a base URL and a relative path.

    Exactly one slash separates the base URL and the path,
    e.g. absolute_url("http://127.0.0.1:53262", "my/path") and
    absolute_url("http://127.0.0.1:53262", "/my/path") both return
    "http://127.0.0.1:53262/my/path".

    Args:
        base_url (str): the base URL (without a trailing slash)
        path (str): the path, may include a query string

    Returns:
        str: the absolute URL, or base_url if the path is empty
    """
    if not path:
        return base_url
    if path.startswith("/"):
        return base_url + path
    return base_url + "/" + path
