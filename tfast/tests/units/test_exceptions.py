# ruff: noqa: S101
import pickle

from tfast.exceptions.server import AcceptLoopError, BindError


def test_exception_repr():
    """Test that the representation of an exception includes its extra data."""
    error = AcceptLoopError(url="http://127.0.0.1:8080", msg="server failed to start")
    assert repr(error) == (
        "AcceptLoopError(url='http://127.0.0.1:8080', msg='server failed to start')"
    )
    assert str(error) == (
        "AcceptLoopError(url=http://127.0.0.1:8080, msg=server failed to start)"
    )


def test_exception_pickle():
    """Test that exceptions keep their data when pickled."""
    data = pickle.dumps(BindError(address="127.0.0.1:80", msg="denied"))
    error = pickle.loads(data)  # noqa: S301
    assert error.address == "127.0.0.1:80"
    assert error.get_data() == {"address": "127.0.0.1:80", "msg": "denied"}
