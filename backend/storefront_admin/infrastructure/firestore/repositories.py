"""Firestore implementations of the template, service and order repositories."""

import logging
from collections.abc import Callable
from typing import Any

from google.cloud.firestore_v1 import SERVER_TIMESTAMP
from google.cloud.firestore_v1.base_query import BaseQuery, FieldFilter

from storefront_admin.application.interfaces import (
    OrderRepository,
    ServiceRepository,
    TemplateRepository,
)
from storefront_admin.domain.entities import Order, Service, Template

from .errors import translate_google_errors
from .transformers import (
    order_from_firestore,
    service_from_firestore,
    snapshot_parts,
    template_from_firestore,
    template_to_firestore,
)

logger = logging.getLogger(__name__)

TEMPLATES = "templates"
SERVICES = "services"
ORDERS = "orders"
USERS = "users"


class _FirestoreRepository:
    """Shared plumbing: a lazily resolved client and single-document reads."""

    collection_name: str = ""

    def __init__(self, db_provider: Callable[[], Any]):
        self._db_provider = db_provider

    def _collection(self) -> Any:
        return self._db_provider().collection(self.collection_name)

    async def _get_snapshot(self, doc_id: str) -> Any | None:
        with translate_google_errors():
            snapshot = await self._collection().document(doc_id).get()
        return snapshot if snapshot.exists else None

    async def _first_where(self, field: str, value: str) -> Any | None:
        query = self._collection().where(filter=FieldFilter(field, "==", value)).limit(1)
        with translate_google_errors():
            snapshots = await query.get()
        return snapshots[0] if snapshots else None


class FirestoreTemplateRepository(_FirestoreRepository, TemplateRepository):
    collection_name = TEMPLATES

    async def get_by_id(self, template_id: str) -> Template | None:
        snapshot = await self._get_snapshot(template_id)
        return template_from_firestore(*snapshot_parts(snapshot)) if snapshot else None

    async def create(self, template: Template) -> Template:
        data = template_to_firestore(template)
        data["createdAt"] = SERVER_TIMESTAMP
        data["updatedAt"] = SERVER_TIMESTAMP
        doc_ref = self._collection().document()
        with translate_google_errors():
            await doc_ref.set(data)
            snapshot = await doc_ref.get()
        logger.info("Created template '%s' (%s)", template.title, doc_ref.id)
        return template_from_firestore(*snapshot_parts(snapshot))

    async def update(self, template: Template) -> Template:
        data = template_to_firestore(template)
        data["updatedAt"] = SERVER_TIMESTAMP
        doc_ref = self._collection().document(template.id)
        with translate_google_errors():
            await doc_ref.update(data)
            snapshot = await doc_ref.get()
        return template_from_firestore(*snapshot_parts(snapshot))

    async def delete(self, template_id: str) -> bool:
        if await self._get_snapshot(template_id) is None:
            return False
        with translate_google_errors():
            await self._collection().document(template_id).delete()
        logger.info("Deleted template %s", template_id)
        return True


class FirestoreServiceRepository(_FirestoreRepository, ServiceRepository):
    collection_name = SERVICES

    async def get_by_id(self, service_id: str) -> Service | None:
        snapshot = await self._get_snapshot(service_id)
        return service_from_firestore(*snapshot_parts(snapshot)) if snapshot else None

    async def get_by_slug(self, slug: str) -> Service | None:
        snapshot = await self._first_where("slug", slug)
        return service_from_firestore(*snapshot_parts(snapshot)) if snapshot else None


class FirestoreOrderRepository(_FirestoreRepository, OrderRepository):
    collection_name = ORDERS

    async def get_by_order_id(self, order_id: str) -> Order | None:
        snapshot = await self._first_where("orderId", order_id)
        return order_from_firestore(*snapshot_parts(snapshot)) if snapshot else None

    async def get_by_xendit_invoice_id(self, invoice_id: str) -> Order | None:
        snapshot = await self._first_where("xenditInvoiceId", invoice_id)
        return order_from_firestore(*snapshot_parts(snapshot)) if snapshot else None

    async def list_for_user(self, user_id: str) -> list[Order]:
        query = (
            self._collection()
            .where(filter=FieldFilter("userId", "==", user_id))
            .order_by("createdAt", direction=BaseQuery.DESCENDING)
        )
        with translate_google_errors():
            snapshots = await query.get()
        return [order_from_firestore(*snapshot_parts(s)) for s in snapshots]

    async def update_status(
        self,
        doc_id: str,
        status: str,
        xendit_payment_status: str | None = None,
    ) -> Order | None:
        if await self._get_snapshot(doc_id) is None:
            return None
        changes: dict[str, Any] = {"status": status, "updatedAt": SERVER_TIMESTAMP}
        if xendit_payment_status is not None:
            changes["xenditPaymentStatus"] = xendit_payment_status
        doc_ref = self._collection().document(doc_id)
        with translate_google_errors():
            await doc_ref.update(changes)
            snapshot = await doc_ref.get()
        logger.info("Order %s status → %s", doc_id, status)
        return order_from_firestore(*snapshot_parts(snapshot))
