# services/document_store.py

"""
Document store backed by Supabase tables (PostgREST).

A "collection" is a table name and a document id is the row's ``id``
column. Filters are plain value objects so callers never touch the
query builder directly.
"""

from typing import Any, List, NamedTuple, Optional

from supabase import Client

from core.errors import DocumentNotFound


# ============================================================
# Filters
# ============================================================
class Filter(NamedTuple):
    op: str
    field: Optional[str] = None
    value: Any = None


def order_desc(field: str) -> Filter:
    return Filter("order_desc", field)


def limit(count: int) -> Filter:
    return Filter("limit", None, count)


def apply_filters(query, filters: List[Filter]):
    for f in filters:
        if f.op == "order_desc":
            query = query.order(f.field, desc=True)
        elif f.op == "limit":
            query = query.limit(f.value)
        else:
            raise ValueError(f"Unsupported filter: {f.op}")
    return query


# ============================================================
# Store
# ============================================================
class DocumentStore:
    def __init__(self, client: Client):
        self.client = client

    def get_document(self, collection: str, document_id: str) -> dict:
        res = (
            self.client.table(collection)
            .select("*")
            .eq("id", document_id)
            .limit(1)
            .execute()
        )
        if not res.data:
            raise DocumentNotFound(f"{collection}/{document_id} not found")
        return res.data[0]

    def list_documents(self, collection: str, filters: Optional[List[Filter]] = None) -> List[dict]:
        query = self.client.table(collection).select("*")
        query = apply_filters(query, filters or [])
        res = query.execute()
        return res.data or []

    def create_document(self, collection: str, document_id: str, fields: dict) -> dict:
        row = {**fields, "id": document_id}
        res = self.client.table(collection).insert(row).execute()
        if not res.data:
            raise RuntimeError(f"Insert into {collection} returned no data")
        return res.data[0]

    def update_document(self, collection: str, document_id: str, fields: dict) -> dict:
        res = (
            self.client.table(collection)
            .update(fields)
            .eq("id", document_id)
            .execute()
        )
        if not res.data:
            raise DocumentNotFound(f"{collection}/{document_id} not found")
        return res.data[0]

    def delete_document(self, collection: str, document_id: str) -> None:
        self.client.table(collection).delete().eq("id", document_id).execute()
