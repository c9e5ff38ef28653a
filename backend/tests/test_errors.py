from seastyle.core.errors import (
    MSG_CANCELLED,
    MSG_UPSTREAM_EXHAUSTED,
    CancellationError,
    EmptyResponseError,
    NoStrategySucceededError,
    TransportError,
    seastyle_error_to_http,
)


def test_exhausted_chain_is_bad_gateway_with_retry_message():
    exc = seastyle_error_to_http(NoStrategySucceededError("all failed", [TransportError("x")]))
    assert exc.status_code == 502
    assert exc.detail == MSG_UPSTREAM_EXHAUSTED


def test_cancellation_is_client_closed():
    exc = seastyle_error_to_http(CancellationError("stop"))
    assert exc.status_code == 499
    assert exc.detail == MSG_CANCELLED


def test_transport_errors_keep_their_message():
    exc = seastyle_error_to_http(EmptyResponseError("empty body", status_code=200))
    assert exc.status_code == 502
    assert exc.detail == "empty body"


def test_invalid_input_and_unknown_errors():
    assert seastyle_error_to_http(ValueError("Use YYYY-MM-DD.")).status_code == 400
    unknown = seastyle_error_to_http(RuntimeError("boom"))
    assert unknown.status_code == 500
    assert unknown.detail == "boom"
