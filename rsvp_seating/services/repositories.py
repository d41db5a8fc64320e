"""
Repository layer abstracting storage (SQLAlchemy vs Firebase Firestore).

Both stores expose the same operations and hand out immutable record
snapshots, so the services never see ORM objects or Firestore documents.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists, GoogleAPICallError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rsvp_seating.core.config import settings
from rsvp_seating.core.exceptions import NotFoundError, SeatingError, StoreError, ValidationError
from rsvp_seating.models import RSVP, GuestAssignment, Table, UserRole
from rsvp_seating.schemas import AssignmentRecord, RSVPRecord, TableRecord
from rsvp_seating.services.firebase_client import get_firestore_client

logger = logging.getLogger(__name__)


def use_firestore() -> bool:
    return settings.USE_FIREBASE is True


def get_store(db: Optional[Session] = None):
    """Return the store selected by configuration"""
    if use_firestore():
        return FirestoreStore(get_firestore_client())
    return SqlStore(db)


# -------- SQLAlchemy store --------

# Unique-violation text differs per backend: the constraint name (PostgreSQL)
# or the column list (SQLite)
OCCURRENCE_CONSTRAINT = "uq_guest_assignments_occurrence"
OCCURRENCE_COLUMNS = "guest_assignments.rsvp_id, guest_assignments.seat_number"

class SqlStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _reading(self):
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error(f"Database read failed: {exc}")
            raise StoreError(str(exc)) from exc

    @contextmanager
    def _transaction(self, on_integrity: Optional[Callable[[IntegrityError], Optional[SeatingError]]] = None):
        """Commit once on success, roll back everything on failure.

        ``on_integrity`` may translate a constraint violation into a domain
        error; it runs after the rollback.
        """
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if on_integrity is not None:
                error = on_integrity(exc)
                if error is not None:
                    raise error from exc
            logger.error(f"Database constraint violated: {exc.orig}")
            raise StoreError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Database write failed: {exc}")
            raise StoreError(str(exc)) from exc
        except Exception:
            self.db.rollback()
            raise

    # RSVPs

    def list_rsvps(self) -> List[RSVPRecord]:
        with self._reading():
            rows = self.db.query(RSVP).order_by(RSVP.created_at.desc()).all()
        return [RSVPRecord.model_validate(r) for r in rows]

    def get_rsvp(self, rsvp_id: str) -> Optional[RSVPRecord]:
        with self._reading():
            row = self.db.query(RSVP).filter(RSVP.id == rsvp_id).first()
        return RSVPRecord.model_validate(row) if row else None

    def create_rsvp(self, contact_info: str, guest_names: List[str]) -> RSVPRecord:
        rsvp = RSVP(
            contact_info=contact_info,
            guest_count=len(guest_names),
            guest_names=list(guest_names),
        )
        with self._transaction():
            self.db.add(rsvp)
        self.db.refresh(rsvp)
        return RSVPRecord.model_validate(rsvp)

    def delete_rsvp(self, rsvp_id: str) -> bool:
        """Delete an RSVP together with the assignments of its guests"""
        with self._transaction():
            rsvp = self.db.query(RSVP).filter(RSVP.id == rsvp_id).first()
            if not rsvp:
                return False
            self.db.query(GuestAssignment).filter(
                GuestAssignment.rsvp_id == rsvp_id
            ).delete(synchronize_session=False)
            self.db.delete(rsvp)
        return True

    # Tables

    def list_tables(self) -> List[TableRecord]:
        with self._reading():
            rows = self.db.query(Table).order_by(Table.created_at).all()
        return [TableRecord.model_validate(t) for t in rows]

    def get_table(self, table_id: str) -> Optional[TableRecord]:
        with self._reading():
            row = self.db.query(Table).filter(Table.id == table_id).first()
        return TableRecord.model_validate(row) if row else None

    def create_table(self, name: str, capacity: int) -> TableRecord:
        table = Table(name=name, capacity=capacity)
        with self._transaction():
            self.db.add(table)
        self.db.refresh(table)
        return TableRecord.model_validate(table)

    def update_table(self, table_id: str, name: str, capacity: int) -> Optional[TableRecord]:
        with self._transaction():
            table = self.db.query(Table).filter(Table.id == table_id).first()
            if not table:
                return None
            table.name = name
            table.capacity = capacity
        self.db.refresh(table)
        return TableRecord.model_validate(table)

    def delete_table(self, table_id: str) -> bool:
        """Delete a table together with the assignments seated at it"""
        with self._transaction():
            table = self.db.query(Table).filter(Table.id == table_id).first()
            if not table:
                return False
            self.db.query(GuestAssignment).filter(
                GuestAssignment.table_id == table_id
            ).delete(synchronize_session=False)
            self.db.delete(table)
        return True

    # Guest assignments

    def list_assignments(self) -> List[AssignmentRecord]:
        with self._reading():
            rows = self.db.query(GuestAssignment).order_by(GuestAssignment.created_at).all()
        return [AssignmentRecord.model_validate(a) for a in rows]

    def get_assignment(self, assignment_id: str) -> Optional[AssignmentRecord]:
        with self._reading():
            row = self.db.query(GuestAssignment).filter(GuestAssignment.id == assignment_id).first()
        return AssignmentRecord.model_validate(row) if row else None

    def create_assignment(
        self,
        table_id: str,
        rsvp_id: str,
        guest_name: str,
        seat_number: int,
    ) -> AssignmentRecord:
        """Insert an assignment; the (rsvp_id, seat_number) constraint rejects duplicates"""
        assignment = GuestAssignment(
            table_id=table_id,
            rsvp_id=rsvp_id,
            guest_name=guest_name,
            seat_number=seat_number,
        )
        def conflict(exc: IntegrityError) -> Optional[SeatingError]:
            return self._assignment_conflict(exc, table_id, rsvp_id)

        with self._transaction(on_integrity=conflict):
            self.db.add(assignment)
        self.db.refresh(assignment)
        return AssignmentRecord.model_validate(assignment)

    def _assignment_conflict(self, exc: IntegrityError, table_id: str, rsvp_id: str) -> Optional[SeatingError]:
        """Map a failed assignment insert onto the rule it broke"""
        message = str(exc.orig)
        if OCCURRENCE_CONSTRAINT in message or OCCURRENCE_COLUMNS in message:
            return ValidationError("guest already assigned")
        # Foreign keys: the table or RSVP was removed after it was checked
        if not self.db.query(Table.id).filter(Table.id == table_id).first():
            return NotFoundError("table not found")
        if not self.db.query(RSVP.id).filter(RSVP.id == rsvp_id).first():
            return ValidationError("guest not found")
        return None

    def delete_assignment(self, assignment_id: str) -> bool:
        with self._transaction():
            deleted = self.db.query(GuestAssignment).filter(
                GuestAssignment.id == assignment_id
            ).delete(synchronize_session=False)
        return deleted > 0

    # Roles

    def has_role(self, user_id: str, role: str) -> bool:
        with self._reading():
            row = self.db.query(UserRole).filter(
                UserRole.user_id == user_id,
                UserRole.role == role
            ).first()
        return row is not None


# -------- Firestore store --------

RSVPS = "rsvps"
TABLES = "tables"
ASSIGNMENTS = "guest_assignments"
USER_ROLES = "user_roles"


def occurrence_doc_id(rsvp_id: str, seat_number: int) -> str:
    """Assignment document id; written only, records carry the fields themselves"""
    return f"{rsvp_id}_{seat_number}"


def _doc_data(doc) -> Dict[str, Any]:
    data = doc.to_dict()
    data["id"] = doc.id
    return data


class FirestoreStore:
    def __init__(self, client):
        if client is None:
            raise StoreError("Firestore client is not configured")
        self.fs = client

    @contextmanager
    def _guard(self):
        try:
            yield
        except GoogleAPICallError as exc:
            logger.error(f"Firestore call failed: {exc}")
            raise StoreError(exc.message or str(exc)) from exc

    # RSVPs

    def list_rsvps(self) -> List[RSVPRecord]:
        with self._guard():
            docs = self.fs.collection(RSVPS).order_by(
                "created_at", direction=firestore.Query.DESCENDING
            ).get()
        return [RSVPRecord.model_validate(_doc_data(d)) for d in docs]

    def get_rsvp(self, rsvp_id: str) -> Optional[RSVPRecord]:
        with self._guard():
            doc = self.fs.collection(RSVPS).document(rsvp_id).get()
        return RSVPRecord.model_validate(_doc_data(doc)) if doc.exists else None

    def create_rsvp(self, contact_info: str, guest_names: List[str]) -> RSVPRecord:
        now = datetime.utcnow()
        data = {
            "contact_info": contact_info,
            "guest_count": len(guest_names),
            "guest_names": list(guest_names),
            "created_at": now,
            "updated_at": now,
        }
        with self._guard():
            ref = self.fs.collection(RSVPS).document()
            ref.create(data)
        return RSVPRecord.model_validate({**data, "id": ref.id})

    def delete_rsvp(self, rsvp_id: str) -> bool:
        ref = self.fs.collection(RSVPS).document(rsvp_id)
        with self._guard():
            if not ref.get().exists:
                return False
            batch = self.fs.batch()
            for doc in self.fs.collection(ASSIGNMENTS).where("rsvp_id", "==", rsvp_id).get():
                batch.delete(doc.reference)
            batch.delete(ref)
            batch.commit()
        return True

    # Tables

    def list_tables(self) -> List[TableRecord]:
        with self._guard():
            docs = self.fs.collection(TABLES).order_by("created_at").get()
        return [TableRecord.model_validate(_doc_data(d)) for d in docs]

    def get_table(self, table_id: str) -> Optional[TableRecord]:
        with self._guard():
            doc = self.fs.collection(TABLES).document(table_id).get()
        return TableRecord.model_validate(_doc_data(doc)) if doc.exists else None

    def create_table(self, name: str, capacity: int) -> TableRecord:
        data = {"name": name, "capacity": capacity, "created_at": datetime.utcnow()}
        with self._guard():
            ref = self.fs.collection(TABLES).document()
            ref.create(data)
        return TableRecord.model_validate({**data, "id": ref.id})

    def update_table(self, table_id: str, name: str, capacity: int) -> Optional[TableRecord]:
        ref = self.fs.collection(TABLES).document(table_id)
        with self._guard():
            if not ref.get().exists:
                return None
            ref.update({"name": name, "capacity": capacity})
            doc = ref.get()
        return TableRecord.model_validate(_doc_data(doc))

    def delete_table(self, table_id: str) -> bool:
        ref = self.fs.collection(TABLES).document(table_id)
        with self._guard():
            if not ref.get().exists:
                return False
            batch = self.fs.batch()
            for doc in self.fs.collection(ASSIGNMENTS).where("table_id", "==", table_id).get():
                batch.delete(doc.reference)
            batch.delete(ref)
            batch.commit()
        return True

    # Guest assignments

    def list_assignments(self) -> List[AssignmentRecord]:
        with self._guard():
            docs = self.fs.collection(ASSIGNMENTS).order_by("created_at").get()
        return [AssignmentRecord.model_validate(_doc_data(d)) for d in docs]

    def get_assignment(self, assignment_id: str) -> Optional[AssignmentRecord]:
        with self._guard():
            doc = self.fs.collection(ASSIGNMENTS).document(assignment_id).get()
        return AssignmentRecord.model_validate(_doc_data(doc)) if doc.exists else None

    def create_assignment(
        self,
        table_id: str,
        rsvp_id: str,
        guest_name: str,
        seat_number: int,
    ) -> AssignmentRecord:
        """Insert an assignment under a document id owned by the occurrence.

        ``create()`` fails when the document exists, so a second assignment of
        the same occurrence is rejected by Firestore itself.
        """
        data = {
            "table_id": table_id,
            "rsvp_id": rsvp_id,
            "guest_name": guest_name,
            "seat_number": seat_number,
            "created_at": datetime.utcnow(),
        }
        ref = self.fs.collection(ASSIGNMENTS).document(occurrence_doc_id(rsvp_id, seat_number))
        with self._guard():
            try:
                ref.create(data)
            except AlreadyExists as exc:
                raise ValidationError("guest already assigned") from exc
        return AssignmentRecord.model_validate({**data, "id": ref.id})

    def delete_assignment(self, assignment_id: str) -> bool:
        ref = self.fs.collection(ASSIGNMENTS).document(assignment_id)
        with self._guard():
            if not ref.get().exists:
                return False
            ref.delete()
        return True

    # Roles

    def has_role(self, user_id: str, role: str) -> bool:
        with self._guard():
            docs = self.fs.collection(USER_ROLES).where("user_id", "==", user_id).where("role", "==", role).limit(1).get()
        return len(docs) > 0
