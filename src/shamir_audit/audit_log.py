"""Signed, hash-chained audit trail of reconstruction runs.

Every run appends one JSON record to the trail directory. Records are signed
with an Ed25519 key kept next to them and each payload carries the SHA3-512
chain hash of the previous record. :meth:`AuditTrail.verify_record` checks a
single record; :meth:`AuditTrail.verify_chain` walks the whole trail and fails
when a record was edited, removed or inserted.
"""
from __future__ import annotations

import hashlib
import json
import os
import time
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .errors import AuditTrailError

GENESIS = "GENESIS"


def _canonical(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True).encode("utf-8")


class AuditTrail:
    """Append-only record store rooted at *directory*."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory).expanduser()
        self.key_path = self.directory / "signing_key.pem"
        self.chain_state_path = self.directory / "chain.state"

    def _load_private_key(self) -> Ed25519PrivateKey:
        if self.key_path.exists():
            return serialization.load_pem_private_key(self.key_path.read_bytes(), password=None)
        private_key = Ed25519PrivateKey.generate()
        self.key_path.write_bytes(
            private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )
        return private_key

    def _public_key(self) -> Optional[Ed25519PublicKey]:
        try:
            data = self.key_path.read_bytes()
        except FileNotFoundError:
            return None
        return serialization.load_pem_private_key(data, password=None).public_key()

    def last_hash(self) -> str:
        try:
            return self.chain_state_path.read_text().strip()
        except FileNotFoundError:
            return GENESIS

    def records(self) -> list[Path]:
        return sorted(self.directory.glob("audit_*.json"))

    def record(self, event: str, *, details: Dict[str, Any] | None = None) -> Path:
        """Sign and store *event*; return the path of the new record."""

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            timestamp = int(time.time())
            payload = {
                "event": event,
                "details": details or {},
                "timestamp": timestamp,
                "prev_hash": self.last_hash(),
            }
            message = _canonical(payload)
            signature = self._load_private_key().sign(message)
            chain_hash = hashlib.sha3_512(message + signature).hexdigest()
            entry = {
                "payload": payload,
                "signature": signature.hex(),
                "chain_hash": chain_hash,
            }
            file_path = self.directory / f"audit_{timestamp}_{uuid.uuid4().hex}.json"
            file_path.write_text(json.dumps(entry, ensure_ascii=False, indent=2))
            self.chain_state_path.write_text(chain_hash)
        except OSError as exc:
            raise AuditTrailError(f"Cannot write audit record to {self.directory}: {exc}") from exc
        return file_path

    def _check(self, data: Dict[str, Any], public_key: Ed25519PublicKey) -> bool:
        message = _canonical(data["payload"])
        signature = bytes.fromhex(data.get("signature") or "")
        try:
            public_key.verify(signature, message)
        except InvalidSignature:
            return False
        return hashlib.sha3_512(message + signature).hexdigest() == data.get("chain_hash")

    def verify_record(self, path: str | os.PathLike[str]) -> bool:
        """Check the signature and chain hash of the record at *path*."""

        public_key = self._public_key()
        if public_key is None:
            return False
        return self._check(json.loads(Path(path).read_text()), public_key)

    def verify_chain(self) -> bool:
        """Check every record and that they form one unbroken chain."""

        public_key = self._public_key()
        if public_key is None:
            return not self.records() and self.last_hash() == GENESIS
        by_prev: Dict[str, Dict[str, Any]] = {}
        for path in self.records():
            data = json.loads(path.read_text())
            if not self._check(data, public_key):
                return False
            prev_hash = data["payload"].get("prev_hash")
            if prev_hash in by_prev:
                return False
            by_prev[prev_hash] = data

        current = GENESIS
        while by_prev:
            data = by_prev.pop(current, None)
            if data is None:
                return False
            current = data["chain_hash"]
        return current == self.last_hash()


__all__ = ["AuditTrail", "GENESIS"]
