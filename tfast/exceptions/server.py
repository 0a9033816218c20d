from pathlib import Path

from tfast.exceptions.core import BaseException

__all__ = [
    "BindError",
    "FileWriteError",
    "CertificateLoadError",
    "AcceptLoopError",
]


class BindError(BaseException):
    """Exception raised when the listener cannot be bound.

    Attributes:
        address (str): the requested address
        msg (str): the error message
    """

    def __init__(self, address: str, msg: str = ""):
        """Initialize the exception.

        Args:
            address (str): the requested address
            msg (str): the error message
        """
        super().__init__(address=address, msg=msg)
        self.address = address
        self.msg = msg

    def __reduce__(self):
        """Used for pickling."""
        return (self.__class__, (self.address, self.msg))


class FileWriteError(BaseException):
    """Exception raised when a temporary credential file cannot be written.

    Attributes:
        path (Path | str): the file (or file prefix) that could not be written
        msg (str): the error message
    """

    def __init__(self, path: Path | str, msg: str = ""):
        """Initialize the exception.

        Args:
            path (Path | str): the file (or file prefix) that could not be written
            msg (str): the error message
        """
        super().__init__(path=path, msg=msg)
        self.path = path
        self.msg = msg

    def __reduce__(self):
        """Used for pickling."""
        return (self.__class__, (self.path, self.msg))


class CertificateLoadError(BaseException):
    """Exception raised when the certificate and key cannot be loaded.

    Attributes:
        cert_file (Path): path to the certificate file
        key_file (Path): path to the key file
        msg (str): the error message
    """

    def __init__(self, cert_file: Path, key_file: Path, msg: str = ""):
        """Initialize the exception.

        Args:
            cert_file (Path): path to the certificate file
            key_file (Path): path to the key file
            msg (str): the error message
        """
        super().__init__(cert_file=cert_file, key_file=key_file, msg=msg)
        self.cert_file = cert_file
        self.key_file = key_file
        self.msg = msg

    def __reduce__(self):
        """Used for pickling."""
        return (self.__class__, (self.cert_file, self.key_file, self.msg))


class AcceptLoopError(BaseException):
    """Exception reported when the background server fails.

    It is never raised into the thread that started the server. It is only
    logged and passed to the `on_error` callback of the server.

    Attributes:
        url (str): base URL of the server
        msg (str): the error message
    """

    def __init__(self, url: str, msg: str = ""):
        """Initialize the exception.

        Args:
            url (str): base URL of the server
            msg (str): the error message
        """
        super().__init__(url=url, msg=msg)
        self.url = url
        self.msg = msg

    def __reduce__(self):
        """Used for pickling."""
        return (self.__class__, (self.url, self.msg))
