"""Tests for core.pool helpers: create_client, parse_document_id, find_document, health_check."""

import asyncio

import pytest
from bson import ObjectId
from pymongo.errors import (
    AutoReconnect,
    ExecutionTimeout,
    OperationFailure,
    ServerSelectionTimeoutError,
)

from docwrapper.core.exceptions import (
    DocumentLookupError,
    DocumentNotFoundError,
    LookupTimeoutError,
    StoreUnavailableError,
)
from docwrapper.core.pool import (
    create_client,
    find_document,
    health_check,
    parse_document_id,
    render_document,
)
from tests.utils.fake_mongo import FakeClient, FakeClientFactory, FakeCollection


def test_create_client_passes_pool_and_timeouts() -> None:
    factory = FakeClientFactory(FakeClient())
    client = create_client(
        "mongodb://mongodb:27017",
        max_pool_size=300,
        connect_timeout=10,
        client_factory=factory,
    )
    assert client is factory.client
    assert factory.calls == [
        (
            "mongodb://mongodb:27017",
            {
                "maxPoolSize": 300,
                "connectTimeoutMS": 10000,
                "serverSelectionTimeoutMS": 10000,
            },
        )
    ]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 1),
        ("", 1),
        ("7", 7),
        ("-3", -3),
        (" 12 ", 12),
        ("user-1", "user-1"),
        ("64b7f0c2a1b2c3d4e5f60718", ObjectId("64b7f0c2a1b2c3d4e5f60718")),
        ("zzb7f0c2a1b2c3d4e5f60718", "zzb7f0c2a1b2c3d4e5f60718"),
        ("--1", "--1"),
        ("1-", "1-"),
        ("²", "²"),
        ("١٢", "١٢"),
        ("123456789012345678901234", ObjectId("123456789012345678901234")),
        ("9223372036854775807", 2**63 - 1),
        ("-9223372036854775808", -(2**63)),
        ("9223372036854775808", "9223372036854775808"),
        ("-9223372036854775809", "-9223372036854775809"),
    ],
)
def test_parse_document_id(raw, expected) -> None:
    assert parse_document_id(raw, "1") == expected


def test_parse_document_id_int_default() -> None:
    assert parse_document_id(None, 5) == 5


def test_find_document_found() -> None:
    coll = FakeCollection([{"_id": 1, "name": "alpha"}])
    doc = asyncio.run(find_document(coll, 1, timeout=1.0))
    assert doc == {"_id": 1, "name": "alpha"}
    assert coll.calls == [{"_id": 1}]


def test_find_document_not_found() -> None:
    coll = FakeCollection([])
    with pytest.raises(DocumentNotFoundError) as ei:
        asyncio.run(find_document(coll, 99, timeout=1.0))
    assert ei.value.document_id == 99


def test_find_document_deadline_exceeded() -> None:
    coll = FakeCollection([{"_id": 1}], delay=5)
    with pytest.raises(LookupTimeoutError) as ei:
        asyncio.run(find_document(coll, 1, timeout=0.05))
    assert ei.value.timeout == 0.05


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (ServerSelectionTimeoutError("no primary"), StoreUnavailableError),
        (AutoReconnect("connection reset"), StoreUnavailableError),
        (ExecutionTimeout("operation exceeded time limit", code=50), LookupTimeoutError),
        (OperationFailure("unauthorized", code=13), DocumentLookupError),
    ],
)
def test_find_document_driver_errors(error, expected) -> None:
    coll = FakeCollection([{"_id": 1}], error=error)
    with pytest.raises(expected) as ei:
        asyncio.run(find_document(coll, 1, timeout=1.0))
    assert ei.value.__cause__ is error
    assert not isinstance(ei.value, DocumentNotFoundError)


def test_find_document_generic_error_is_not_a_timeout() -> None:
    coll = FakeCollection(error=OperationFailure("boom", code=2))
    with pytest.raises(DocumentLookupError) as ei:
        asyncio.run(find_document(coll, 1, timeout=1.0))
    assert type(ei.value) is DocumentLookupError


def test_render_document() -> None:
    assert render_document({"_id": 1, "a": "b"}) == "Fetched document: {'_id': 1, 'a': 'b'}"


def test_health_check_ok_and_failure() -> None:
    ok_client = FakeClient()
    bad_client = FakeClient(ping_error=ServerSelectionTimeoutError("down"))
    assert asyncio.run(health_check(ok_client, 1.0)) is True
    assert asyncio.run(health_check(bad_client, 1.0)) is False
