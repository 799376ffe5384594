# tests/test_stores.py

"""
Tests for the Supabase and S3 adapters, using mocked clients.
"""

import pytest
from unittest.mock import Mock
from botocore.exceptions import ClientError

from core.errors import AuthError, BackofficeError, DocumentNotFound, FileStoreError, SessionNotFound
from services.document_store import DocumentStore, limit, order_desc
from services.file_store import FileStore
from services.session_store import SessionStore


def _gotrue_user(user_id="u-1", email="staff@example.com", metadata=None):
    user = Mock()
    user.id = user_id
    user.email = email
    user.user_metadata = metadata if metadata is not None else {"full_name": "Staff", "role": "admin"}
    return user


# ------------------------------------------------------------------
# Session store
# ------------------------------------------------------------------
def test_get_current_session_builds_principal():
    client = Mock()
    client.auth.get_user.return_value = Mock(user=_gotrue_user())

    principal = SessionStore(client).get_current_session("jwt")

    assert principal.id == "u-1"
    assert principal.name == "Staff"
    assert principal.preferences["role"] == "admin"
    assert principal.session_ids == ["jwt"]
    client.auth.get_user.assert_called_once_with("jwt")


def test_get_current_session_without_token():
    client = Mock()
    with pytest.raises(SessionNotFound):
        SessionStore(client).get_current_session(None)
    client.auth.get_user.assert_not_called()


def test_get_current_session_rejected_token():
    client = Mock()
    client.auth.get_user.side_effect = Exception("invalid JWT")

    with pytest.raises(SessionNotFound):
        SessionStore(client).get_current_session("bad")


def test_create_session_success():
    client = Mock()
    resp = Mock()
    resp.session.access_token = "jwt-1"
    resp.user = _gotrue_user(metadata={})
    client.auth.sign_in_with_password.return_value = resp

    session = SessionStore(client).create_session("staff@example.com", "pw")

    assert session.id == "jwt-1"
    assert session.principal.preferences == {}
    client.auth.sign_in_with_password.assert_called_once_with(
        {"email": "staff@example.com", "password": "pw"}
    )


def test_create_session_keeps_store_message():
    client = Mock()
    error = Exception("Invalid login credentials")
    error.message = "Invalid login credentials"
    client.auth.sign_in_with_password.side_effect = error

    with pytest.raises(AuthError) as exc:
        SessionStore(client).create_session("staff@example.com", "wrong")

    assert exc.value.message == "Invalid login credentials"


def test_delete_session_wraps_errors():
    client = Mock()
    client.auth.admin.sign_out.side_effect = Exception("timeout")

    with pytest.raises(BackofficeError):
        SessionStore(client).delete_session("jwt")


def test_provision_principal_uses_random_password():
    client = Mock()
    client.auth.admin.create_user.return_value = Mock(user=_gotrue_user(user_id="new-1"))
    store = SessionStore(client)

    store.provision_principal("a@example.com", "A", "admin")
    store.provision_principal("b@example.com", "B", "admin")

    first = client.auth.admin.create_user.call_args_list[0].args[0]
    second = client.auth.admin.create_user.call_args_list[1].args[0]
    assert first["password"] != second["password"]
    assert len(first["password"]) >= 32
    assert first["user_metadata"] == {"full_name": "A", "role": "admin"}


# ------------------------------------------------------------------
# Document store
# ------------------------------------------------------------------
def _query_mock(data):
    query = Mock()
    for name in ("select", "eq", "order", "limit", "insert", "update", "delete"):
        getattr(query, name).return_value = query
    query.execute.return_value = Mock(data=data)
    return query


def test_get_document():
    client = Mock()
    query = _query_mock([{"id": "p1"}])
    client.table.return_value = query

    assert DocumentStore(client).get_document("properties", "p1") == {"id": "p1"}
    client.table.assert_called_once_with("properties")
    query.eq.assert_called_once_with("id", "p1")


def test_get_document_not_found():
    client = Mock()
    client.table.return_value = _query_mock([])

    with pytest.raises(DocumentNotFound):
        DocumentStore(client).get_document("admins", "ghost")


def test_list_documents_applies_filters():
    client = Mock()
    query = _query_mock([{"id": "p1"}])
    client.table.return_value = query

    rows = DocumentStore(client).list_documents("properties", [order_desc("created_at"), limit(100)])

    assert rows == [{"id": "p1"}]
    query.order.assert_called_once_with("created_at", desc=True)
    query.limit.assert_called_once_with(100)


def test_create_document_sets_id():
    client = Mock()
    query = _query_mock([{"id": "a1", "email": "x@example.com"}])
    client.table.return_value = query

    DocumentStore(client).create_document("admins", "a1", {"email": "x@example.com"})

    query.insert.assert_called_once_with({"email": "x@example.com", "id": "a1"})


def test_update_missing_document():
    client = Mock()
    client.table.return_value = _query_mock([])

    with pytest.raises(DocumentNotFound):
        DocumentStore(client).update_document("properties", "ghost", {"floors": 2})


# ------------------------------------------------------------------
# File store
# ------------------------------------------------------------------
def test_list_files():
    s3 = Mock()
    s3.get_paginator.return_value.paginate.return_value = [
        {"Contents": [{"Key": "props/b.jpg", "Size": 2048}, {"Key": "props/a.jpg", "Size": 1024}]},
        {},
    ]

    files = FileStore(s3).list_files("property_photos")

    assert [f.file_id for f in files] == ["props/a.jpg", "props/b.jpg"]
    assert files[0].name == "a.jpg"
    assert files[0].size_kb == 1.0
    s3.get_paginator.return_value.paginate.assert_called_once_with(Bucket="property_photos")


def test_view_url_is_presigned():
    s3 = Mock()
    s3.generate_presigned_url.return_value = "https://s3.test/signed"

    url = FileStore(s3).get_file_view_url("property_photos", "props/a.jpg")

    assert url == "https://s3.test/signed"
    kwargs = s3.generate_presigned_url.call_args.kwargs
    assert kwargs["Params"] == {"Bucket": "property_photos", "Key": "props/a.jpg"}


def test_view_url_error():
    s3 = Mock()
    s3.generate_presigned_url.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetObject"
    )

    with pytest.raises(FileStoreError):
        FileStore(s3).get_file_view_url("property_photos", "x")
